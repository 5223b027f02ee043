# apps/board/models.py

import uuid

from django.conf import settings
from django.core.validators import MaxLengthValidator
from django.db import models

from .validators import validate_attachments


class Task(models.Model):
    """
    Tarefa do board Kanban

    Sempre pertence a exatamente uma conta (owner). Nenhuma consulta
    ou mutação deve acontecer sem filtrar pelo owner - ver TaskStore.
    """

    PRIORIDADE_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
    ]

    CATEGORIA_CHOICES = [
        ('feature', 'Feature'),
        ('bug', 'Bug'),
        ('enhancement', 'Enhancement'),
        ('documentation', 'Documentation'),
        ('other', 'Other'),
    ]

    COLUNA_CHOICES = [
        ('todo', 'To Do'),
        ('inprogress', 'In Progress'),
        ('done', 'Done'),
    ]

    # Ordem de exibição das colunas no board
    ORDEM_COLUNAS = ['todo', 'inprogress', 'done']

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='tasks'
    )
    title = models.CharField(max_length=200)
    description = models.TextField(
        blank=True,
        default='',
        validators=[MaxLengthValidator(2000)]
    )
    priority = models.CharField(max_length=10, choices=PRIORIDADE_CHOICES, default='medium')
    category = models.CharField(max_length=20, choices=CATEGORIA_CHOICES, default='feature')
    column = models.CharField(max_length=20, choices=COLUNA_CHOICES, default='todo')
    attachments = models.JSONField(default=list, blank=True, validators=[validate_attachments])
    order = models.FloatField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'task'
        ordering = ['column', 'order', 'created_at']
        indexes = [
            models.Index(fields=['owner', 'column'], name='task_owner_column_idx'),
        ]

    def to_dict(self):
        """Representação canônica enviada pelo canal e pela API REST"""
        return {
            'id': str(self.id),
            'userId': self.owner_id,
            'title': self.title,
            'description': self.description,
            'priority': self.priority,
            'category': self.category,
            'column': self.column,
            'attachments': list(self.attachments or []),
            'order': self.order,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __str__(self):
        return f"[{self.column}] {self.title}"
