# apps/core/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import Usuario


@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """Admin customizado para as contas do board"""

    list_display = [
        'username', 'email', 'tasks_count', 'is_active', 'date_joined', 'last_login'
    ]
    list_filter = ['is_staff', 'is_active', 'date_joined']
    search_fields = ['username', 'email']
    ordering = ['-date_joined']

    def tasks_count(self, obj):
        """Quantidade de tarefas da conta"""
        return obj.tasks.count()

    tasks_count.short_description = 'Tarefas'
