# apps/board/admin.py

from django.contrib import admin
from django.utils.html import format_html
from .models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin para inspeção das tarefas (sempre com a conta dona visível)"""

    list_display = ['title', 'owner', 'column', 'priority_badge', 'category', 'order', 'updated_at']
    list_filter = ['column', 'priority', 'category']
    search_fields = ['title', 'description', 'owner__username', 'owner__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    list_select_related = ['owner']

    fieldsets = (
        ('Informações Básicas', {
            'fields': ('id', 'owner', 'title', 'description')
        }),
        ('Board', {
            'fields': ('column', 'order', 'priority', 'category')
        }),
        ('Anexos', {
            'fields': ('attachments',),
            'classes': ('collapse',)
        }),
        ('Datas', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )

    def priority_badge(self, obj):
        """Exibe a prioridade com badge colorido"""
        cores = {
            'low': '#22c55e',  # verde
            'medium': '#f59e0b',  # amarelo
            'high': '#ef4444',  # vermelho
        }
        cor = cores.get(obj.priority, '#6B7280')
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 8px; border-radius: 4px; font-size: 11px;">{}</span>',
            cor, obj.get_priority_display()
        )

    priority_badge.short_description = 'Prioridade'
