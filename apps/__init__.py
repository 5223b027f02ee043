# apps/__init__.py

"""
Kanban Sync - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Contas, tokens de sessão e taxonomia de erros
- board: Tarefas, canal de sincronização em tempo real e anexos
"""

__version__ = '0.1.0'
