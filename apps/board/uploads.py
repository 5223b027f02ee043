# apps/board/uploads.py

"""
Upload Relay - guarda anexos e devolve a referência usada pela tarefa

O armazenamento é o storage padrão do Django (disco em desenvolvimento,
S3 em produção quando USE_S3 está ligado). O conteúdo do arquivo nunca
é inspecionado aqui.
"""

import logging
from typing import Callable, Dict, Optional

from django.conf import settings
from django.core.files.storage import default_storage

from apps.core.exceptions import UploadError
from apps.core.utils import gerar_nome_arquivo

logger = logging.getLogger(__name__)

PASTA_ANEXOS = 'attachments'


class UploadRelay:
    """Valida e armazena um arquivo por chamada"""

    def __init__(self, storage=None):
        self._storage = storage

    @property
    def storage(self):
        return self._storage or default_storage

    @property
    def tipos_permitidos(self):
        return settings.KANBAN_ALLOWED_UPLOAD_TYPES

    @property
    def tamanho_maximo(self) -> int:
        return settings.KANBAN_MAX_UPLOAD_SIZE

    def validate(self, arquivo):
        """
        Raises:
            UploadError: arquivo ausente, tipo fora da lista ou grande demais
        """
        if arquivo is None:
            raise UploadError('No file uploaded')

        if arquivo.content_type not in self.tipos_permitidos:
            raise UploadError('Invalid file type. Allowed: images, PDF, DOC, DOCX, TXT')

        if arquivo.size > self.tamanho_maximo:
            raise UploadError(
                f'File too large. Maximum size is {self.tamanho_maximo // (1024 * 1024)}MB.'
            )

    def store(self, arquivo, build_url: Optional[Callable[[str], str]] = None) -> Dict:
        """
        Valida, salva e devolve {filename, originalName, url, mimetype, size}

        build_url permite transformar a URL relativa do storage em absoluta
        (a view usa request.build_absolute_uri).
        """
        self.validate(arquivo)

        nome = self.storage.save(f"{PASTA_ANEXOS}/{gerar_nome_arquivo(arquivo.name)}", arquivo)
        url = self.storage.url(nome)
        if build_url:
            url = build_url(url)

        logger.info(f"📎 Anexo armazenado: {nome} ({arquivo.size} bytes)")

        return {
            'filename': nome.rsplit('/', 1)[-1],
            'originalName': arquivo.name,
            'url': url,
            'mimetype': arquivo.content_type,
            'size': arquivo.size,
        }


# Instância global do serviço (Singleton pattern)
upload_relay = UploadRelay()
