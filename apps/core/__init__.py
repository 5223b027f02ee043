# apps/core/__init__.py

"""
Core - Contas e autenticação do Kanban Sync

Contém:
- Model de conta (Usuario)
- Serviço de tokens de sessão usado pelo HTTP e pelo WebSocket
- Taxonomia de erros do board
- Comando de seed para desenvolvimento
"""
