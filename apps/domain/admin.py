from django.contrib import admin
from .models import Provider, UserClaim, UserLockout


@admin.register(Provider)
class ProviderAdmin(admin.ModelAdmin):
    list_display = ['name', 'document', 'active']
    list_filter = ['active']
    search_fields = ['name', 'document']
    readonly_fields = ['id']


@admin.register(UserClaim)
class UserClaimAdmin(admin.ModelAdmin):
    list_display = ['user', 'claim_type', 'claim_value']
    list_filter = ['claim_type']
    search_fields = ['user__username', 'claim_type']
    autocomplete_fields = ['user']


@admin.register(UserLockout)
class UserLockoutAdmin(admin.ModelAdmin):
    list_display = ['user', 'access_failed_count', 'lockout_end']
    search_fields = ['user__username']
    readonly_fields = ['user']
    actions = ['unlock']

    @admin.action(description='Desbloquear usuários selecionados')
    def unlock(self, request, queryset):
        queryset.update(access_failed_count=0, lockout_end=None)
