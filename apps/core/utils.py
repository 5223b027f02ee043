# apps/core/utils.py

import json
import os
import random
import time
from typing import Optional
from urllib.parse import parse_qs

from django.utils import timezone

from .exceptions import ValidationError


def get_timestamp() -> str:
    """Retorna timestamp atual em formato ISO"""
    return timezone.now().isoformat()


def extrair_bearer_token(valor_header: Optional[str]) -> Optional[str]:
    """
    Extrai o token de um header Authorization
    Ex: "Bearer abc.def" -> "abc.def"
    """
    if not valor_header:
        return None

    partes = valor_header.strip().split(None, 1)
    if len(partes) != 2 or partes[0].lower() != 'bearer':
        return None

    return partes[1].strip() or None


def extrair_token_do_scope(scope) -> Optional[str]:
    """
    Procura o token no handshake do WebSocket

    Ordem: query string (?token=), header Authorization
    """
    query = parse_qs(scope.get('query_string', b'').decode('latin-1'))
    if query.get('token'):
        return query['token'][0] or None

    for nome, valor in scope.get('headers', []):
        if nome.lower() == b'authorization':
            token = extrair_bearer_token(valor.decode('latin-1'))
            if token:
                return token

    return None


def gerar_nome_arquivo(nome_original: str) -> str:
    """
    Gera nome único preservando a extensão
    Ex: "relatorio.pdf" -> "1717171717171-483920193.pdf"
    """
    _, extensao = os.path.splitext(nome_original or '')
    sufixo = f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}"
    return f"{sufixo}{extensao.lower()}"


def ler_json(request) -> dict:
    """Lê o corpo JSON de uma request (corpo vazio vira {})"""
    try:
        dados = json.loads(request.body or b'{}')
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError('Invalid JSON body')

    if not isinstance(dados, dict):
        raise ValidationError('JSON body must be an object')

    return dados
