# apps/core/models.py

from django.contrib.auth.models import AbstractUser
from django.db import models


class Usuario(AbstractUser):
    """
    Conta do board

    Cada conta é dona de um conjunto privado de tarefas e só enxerga
    as próprias tarefas. É a chave de escopo de todo o Task Store.
    """

    # Email único - login aceita username ou email
    email = models.EmailField('email address', unique=True)

    class Meta:
        db_table = 'usuario'

    def resumo(self):
        """Resumo público da conta (nunca inclui hash de senha)"""
        return {
            'id': self.pk,
            'username': self.username,
            'email': self.email,
            'createdAt': self.date_joined.isoformat() if self.date_joined else None,
            'lastLogin': self.last_login.isoformat() if self.last_login else None,
        }

    def __str__(self):
        return f"{self.username} <{self.email}>"
