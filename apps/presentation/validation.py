from typing import Dict, List, Mapping, Tuple, Type
from rest_framework import serializers


def _canonical(key: str) -> str:
    return key.replace('_', '').lower()


def normalize_keys(data, serializer_class: Type[serializers.Serializer]) -> Dict:
    """Mapeia as chaves do corpo para os nomes dos campos do serializer.

    A comparação ignora maiúsculas e underscores, então "Name",
    "confirmPassword" e "confirm_password" são aceitos.
    """
    if not isinstance(data, Mapping):
        return data

    field_names = {_canonical(name): name for name in serializer_class().fields}
    normalized = {}
    for key, value in data.items():
        normalized[field_names.get(_canonical(str(key)), key)] = value
    return normalized


def validate_payload(data, serializer_class: Type[serializers.Serializer]) -> Tuple[serializers.Serializer, Dict[str, List[str]]]:
    """Executa as regras do serializer e retorna (serializer, erros por campo).

    O dicionário de erros fica vazio quando o payload é válido.
    """
    serializer = serializer_class(data=normalize_keys(data, serializer_class))
    if serializer.is_valid():
        return serializer, {}

    errors = {
        field: [str(message) for message in messages] if isinstance(messages, list) else [str(messages)]
        for field, messages in serializer.errors.items()
    }
    return serializer, errors
