# apps/board/apps.py

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class BoardConfig(AppConfig):
    """Configuração da app Board"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.board'
    verbose_name = 'Board - Tarefas e Sincronização'

    def ready(self):
        # Log de inicialização
        logger.info("🔌 Board App inicializada - canal de sincronização habilitado")
