# tests/test_auth_service.py

import pytest
from django.core import signing

from apps.core.auth_service import auth_service
from apps.core.exceptions import AuthError, DuplicateAccount, ValidationError
from apps.core.models import Usuario

from .conftest import SENHA_PADRAO

pytestmark = pytest.mark.django_db


def test_token_resolve_a_conta(criar_conta):
    conta = criar_conta()

    token = auth_service.issue_token(conta.pk)

    assert auth_service.verify_token(token) == conta


@pytest.mark.parametrize('token, code', [
    (None, 'missing'),
    ('', 'missing'),
    ('sem-separadores', 'malformed'),
    ('a:b:c:d', 'malformed'),
])
def test_token_ausente_ou_malformado(token, code):
    with pytest.raises(AuthError) as exc:
        auth_service.verify_token(token)

    assert exc.value.code == code
    assert exc.value.status_code == 401


def test_token_com_assinatura_adulterada(criar_conta):
    conta = criar_conta()
    payload, timestamp, assinatura = auth_service.issue_token(conta.pk).split(':')
    adulterado = f'{payload}:{timestamp}:{assinatura[::-1]}'

    with pytest.raises(AuthError) as exc:
        auth_service.verify_token(adulterado)

    assert exc.value.code == 'invalid_signature'


def test_token_assinado_com_outro_salt(criar_conta):
    conta = criar_conta()
    token = signing.dumps({'uid': str(conta.pk)}, salt='outro.salt', compress=True)

    with pytest.raises(AuthError) as exc:
        auth_service.verify_token(token)

    assert exc.value.code == 'invalid_signature'


def test_token_expirado(criar_conta, settings):
    conta = criar_conta()
    token = auth_service.issue_token(conta.pk)
    settings.KANBAN_TOKEN_MAX_AGE = -1

    with pytest.raises(AuthError) as exc:
        auth_service.verify_token(token)

    assert exc.value.code == 'expired'
    assert exc.value.message == 'Not authorized, token expired'


def test_token_de_conta_removida(criar_conta):
    conta = criar_conta()
    token = auth_service.issue_token(conta.pk)
    conta.delete()

    with pytest.raises(AuthError) as exc:
        auth_service.verify_token(token)

    assert exc.value.code == 'account_not_found'


def test_token_de_conta_inativa(criar_conta):
    conta = criar_conta()
    token = auth_service.issue_token(conta.pk)
    conta.is_active = False
    conta.save()

    with pytest.raises(AuthError) as exc:
        auth_service.verify_token(token)

    assert exc.value.code == 'account_not_found'


def test_register_cria_conta_e_token():
    usuario, token = auth_service.register({
        'username': 'carla',
        'email': 'Carla@Example.com',
        'password': SENHA_PADRAO,
    })

    assert usuario.email == 'carla@example.com'
    assert usuario.check_password(SENHA_PADRAO)
    assert usuario.last_login is not None
    assert auth_service.verify_token(token) == usuario


@pytest.mark.parametrize('dados, campo', [
    ({'email': 'x@example.com', 'password': SENHA_PADRAO}, 'username'),
    ({'username': 'xavier', 'password': SENHA_PADRAO}, 'email'),
    ({'username': 'xavier', 'email': 'x@example.com'}, 'password'),
    ({'username': 'xavier', 'email': 'sem-arroba', 'password': SENHA_PADRAO}, 'email'),
    ({'username': 'xavier', 'email': 'x@example.com', 'password': 'curta'}, 'password'),
    ({'username': 'x y', 'email': 'x@example.com', 'password': SENHA_PADRAO}, 'username'),
])
def test_register_valida_dados(dados, campo):
    with pytest.raises(ValidationError) as exc:
        auth_service.register(dados)

    assert campo in exc.value.errors
    assert Usuario.objects.count() == 0


def test_register_duplicado(criar_conta):
    criar_conta('ana', email='ana@example.com')

    with pytest.raises(DuplicateAccount):
        auth_service.register({'username': 'ANA', 'email': 'nova@example.com', 'password': SENHA_PADRAO})

    with pytest.raises(DuplicateAccount):
        auth_service.register({'username': 'outra', 'email': 'ANA@example.com', 'password': SENHA_PADRAO})


def test_login_por_username_e_por_email(criar_conta):
    conta = criar_conta('ana', email='ana@example.com')

    usuario, token = auth_service.login('ana', SENHA_PADRAO)
    assert usuario == conta
    assert auth_service.verify_token(token) == conta

    usuario, _ = auth_service.login('ana@example.com', SENHA_PADRAO)
    assert usuario == conta


def test_login_senha_errada(criar_conta):
    criar_conta('ana')

    with pytest.raises(AuthError) as exc:
        auth_service.login('ana', 'senha-errada')

    assert exc.value.code == 'invalid_credentials'


def test_login_bloqueia_apos_tentativas(criar_conta, settings):
    settings.KANBAN_MAX_LOGIN_ATTEMPTS = 3
    criar_conta('ana')

    for _ in range(3):
        with pytest.raises(AuthError):
            auth_service.login('ana', 'senha-errada')

    # Mesmo com a senha certa a conta segue bloqueada
    with pytest.raises(AuthError) as exc:
        auth_service.login('ana', SENHA_PADRAO)

    assert exc.value.code == 'locked'


def test_login_com_sucesso_zera_tentativas(criar_conta, settings):
    settings.KANBAN_MAX_LOGIN_ATTEMPTS = 3
    criar_conta('ana')

    for _ in range(2):
        with pytest.raises(AuthError):
            auth_service.login('ana', 'senha-errada')

    auth_service.login('ana', SENHA_PADRAO)

    for _ in range(2):
        with pytest.raises(AuthError):
            auth_service.login('ana', 'senha-errada')

    usuario, _ = auth_service.login('ana', SENHA_PADRAO)
    assert usuario.username == 'ana'
