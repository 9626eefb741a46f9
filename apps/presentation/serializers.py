from rest_framework import serializers
from apps.domain.models import Provider


class ProviderSerializer(serializers.ModelSerializer):
    id = serializers.UUIDField(read_only=True, help_text='Identificador único do fornecedor (gerado na criação)')
    name = serializers.CharField(
        max_length=200,
        trim_whitespace=False,
        help_text='Nome do fornecedor (máximo 200 caracteres)'
    )
    document = serializers.CharField(
        max_length=14,
        trim_whitespace=False,
        help_text='Documento do fornecedor, ex.: CNPJ (máximo 14 caracteres)'
    )
    active = serializers.BooleanField(
        default=False,
        help_text='Indica se o fornecedor está ativo'
    )

    class Meta:
        model = Provider
        fields = ['id', 'name', 'document', 'active']
        read_only_fields = ['id']

    # O valor é gravado como enviado; só espaços conta como vazio
    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError('This field may not be blank.')
        return value

    def validate_document(self, value):
        if not value.strip():
            raise serializers.ValidationError('This field may not be blank.')
        return value


class RegisterUserSerializer(serializers.Serializer):
    email = serializers.EmailField(help_text='E-mail do usuário, usado também como login')
    password = serializers.CharField(
        min_length=6,
        max_length=100,
        trim_whitespace=False,
        style={'input_type': 'password'},
        help_text='Senha (entre 6 e 100 caracteres)'
    )
    confirm_password = serializers.CharField(
        trim_whitespace=False,
        style={'input_type': 'password'},
        help_text='Confirmação da senha'
    )

    def validate(self, data):
        if data.get('password') != data.get('confirm_password'):
            raise serializers.ValidationError({'confirm_password': 'The passwords do not match.'})
        return data


class LoginUserSerializer(serializers.Serializer):
    email = serializers.EmailField(help_text='E-mail do usuário')
    password = serializers.CharField(
        min_length=6,
        max_length=100,
        trim_whitespace=False,
        style={'input_type': 'password'},
        help_text='Senha do usuário'
    )


class UserClaimSerializer(serializers.Serializer):
    type = serializers.CharField()
    value = serializers.CharField(allow_blank=True)


class UserTokenSerializer(serializers.Serializer):
    id = serializers.CharField()
    email = serializers.EmailField()
    claims = UserClaimSerializer(many=True)


class UserResponseSerializer(serializers.Serializer):
    access_token = serializers.CharField(help_text='JWT a ser enviado no header "Authorization: Bearer <token>"')
    expires_in = serializers.IntegerField(help_text='Validade do token em segundos')
    user_token = UserTokenSerializer()
