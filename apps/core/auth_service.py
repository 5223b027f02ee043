# apps/core/auth_service.py

"""
Serviço de Autenticação - emite e valida os tokens de sessão do board

O mesmo verify_token protege as duas portas de entrada:
- requests HTTP (header Authorization: Bearer <token>)
- handshake do WebSocket (?token= na URL ou header Authorization)

Assim as duas portas rejeitam token ausente, malformado, expirado ou
com assinatura inválida com a mesma taxonomia de AuthError.
"""

import logging
from typing import Dict, Optional, Tuple

from django.conf import settings
from django.contrib.auth import authenticate
from django.core import signing
from django.core.cache import cache
from django.db import models
from django.utils import timezone

from .exceptions import AuthError, DuplicateAccount, ValidationError
from .models import Usuario

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Serviço encapsulado para gerenciar autenticação

    - issue_token / verify_token: credencial opaca assinada com expiração
    - register / login: emissão de credencial para contas
    """

    def __init__(self):
        # Atributos privados - encapsulados
        self._token_salt = 'apps.core.auth_service.token'

    @property
    def _token_max_age(self) -> int:
        return settings.KANBAN_TOKEN_MAX_AGE

    @property
    def _max_login_attempts(self) -> int:
        return settings.KANBAN_MAX_LOGIN_ATTEMPTS

    @property
    def _lockout_duration_minutes(self) -> int:
        return settings.KANBAN_LOCKOUT_MINUTES

    # =================== TOKENS ===================

    def issue_token(self, account_id) -> str:
        """Gera token assinado (com timestamp) para a conta"""
        return signing.dumps({'uid': str(account_id)}, salt=self._token_salt, compress=True)

    def verify_token(self, token: Optional[str]) -> Usuario:
        """
        Valida o token e resolve a conta viva correspondente

        Raises:
            AuthError: code em missing, malformed, expired,
                invalid_signature ou account_not_found
        """
        if not token:
            raise AuthError('Not authorized, no token provided', code='missing')

        # Formato do TimestampSigner: payload:timestamp:assinatura
        if not isinstance(token, str) or token.count(':') != 2:
            raise AuthError('Not authorized, malformed token', code='malformed')

        try:
            payload = signing.loads(token, salt=self._token_salt, max_age=self._token_max_age)
        except signing.SignatureExpired:
            raise AuthError('Not authorized, token expired', code='expired')
        except signing.BadSignature:
            raise AuthError('Not authorized, invalid token', code='invalid_signature')

        if not isinstance(payload, dict) or 'uid' not in payload:
            raise AuthError('Not authorized, malformed token', code='malformed')

        try:
            return Usuario.objects.get(pk=payload['uid'], is_active=True)
        except (Usuario.DoesNotExist, ValueError, TypeError):
            raise AuthError('User not found', code='account_not_found')

    # =================== CONTAS ===================

    def register(self, dados: Dict) -> Tuple[Usuario, str]:
        """
        Cria nova conta e já devolve o token de sessão

        Raises:
            ValidationError: dados inválidos
            DuplicateAccount: username ou email já cadastrados
        """
        self._validar_dados_registro(dados)

        username = dados['username'].strip()
        email = dados['email'].strip().lower()

        if self._usuario_existe(username, email):
            raise DuplicateAccount()

        usuario = Usuario.objects.create_user(
            username=username,
            email=email,
            password=dados['password'],  # Django já faz hash automaticamente
        )
        self._atualizar_ultimo_acesso(usuario)

        logger.info(f"👤 Conta criada: {usuario.username}")
        return usuario, self.issue_token(usuario.pk)

    def login(self, identificador: str, password: str) -> Tuple[Usuario, str]:
        """
        Autentica por username ou email e devolve o token

        Raises:
            ValidationError: identificador ou senha que não são texto
            AuthError: credenciais inválidas ou conta bloqueada
        """
        erros = {}
        if identificador is not None and not isinstance(identificador, str):
            erros['email'] = ['Must be a string.']
        if password is not None and not isinstance(password, str):
            erros['password'] = ['Must be a string.']
        if erros:
            raise ValidationError(errors=erros)

        identificador = (identificador or '').strip()

        if self._conta_esta_bloqueada(identificador):
            raise AuthError(
                'Account temporarily locked after too many failed attempts',
                code='locked'
            )

        usuario = self._autenticar_usuario(identificador, password or '')

        if not usuario:
            self._registrar_tentativa_falha(identificador)
            raise AuthError('Invalid credentials', code='invalid_credentials')

        self._resetar_tentativas_login(identificador)
        self._atualizar_ultimo_acesso(usuario)

        logger.info(f"🔑 Login: {usuario.username}")
        return usuario, self.issue_token(usuario.pk)

    # =================== MÉTODOS PRIVADOS (ENCAPSULADOS) ===================

    def _validar_dados_registro(self, dados: Dict):
        """Valida dados de entrada para criação de conta"""
        erros = {}

        for campo in ('username', 'email', 'password'):
            valor = dados.get(campo)
            if not isinstance(valor, str) or not valor.strip():
                erros[campo] = [f'Field {campo} is required.']

        if erros:
            raise ValidationError(errors=erros)

        email = dados['email'].strip()
        if '@' not in email or '.' not in email.split('@')[-1]:
            erros['email'] = ['Invalid email.']

        if not self._validar_senha(dados['password']):
            erros['password'] = ['Password must be at least 8 characters.']

        username = dados['username'].strip()
        if ' ' in username or len(username) < 3:
            erros['username'] = ['Username must have at least 3 characters and no spaces.']

        if erros:
            raise ValidationError(errors=erros)

    def _validar_senha(self, password: str) -> bool:
        return len(password) >= 8

    def _usuario_existe(self, username: str, email: str) -> bool:
        return Usuario.objects.filter(
            models.Q(username__iexact=username) | models.Q(email__iexact=email)
        ).exists()

    def _autenticar_usuario(self, identificador: str, password: str) -> Optional[Usuario]:
        """Autentica usuário (username ou email)"""
        usuario = authenticate(username=identificador, password=password)

        if not usuario:
            # Tentar por email se username falhar
            try:
                user_obj = Usuario.objects.get(email__iexact=identificador, is_active=True)
                usuario = authenticate(username=user_obj.username, password=password)
            except Usuario.DoesNotExist:
                pass

        return usuario

    def _chave_tentativas(self, identificador: str) -> str:
        return f'login_attempts:{identificador.lower()}'

    def _conta_esta_bloqueada(self, identificador: str) -> bool:
        return cache.get(self._chave_tentativas(identificador), 0) >= self._max_login_attempts

    def _registrar_tentativa_falha(self, identificador: str):
        chave = self._chave_tentativas(identificador)
        tentativas = cache.get(chave, 0) + 1
        cache.set(chave, tentativas, timeout=self._lockout_duration_minutes * 60)
        logger.warning(f"⚠️ Tentativa de login falhada para: {identificador} ({tentativas})")

    def _resetar_tentativas_login(self, identificador: str):
        cache.delete(self._chave_tentativas(identificador))

    def _atualizar_ultimo_acesso(self, usuario: Usuario):
        usuario.last_login = timezone.now()
        usuario.save(update_fields=['last_login'])


# Instância global do serviço (Singleton pattern)
auth_service = AuthenticationService()
