# apps/board/__init__.py

"""
Board - Sincronização em tempo real das tarefas

Funcionalidades:
- Task Store escopado por conta
- WebSocket com uma sala por conta (snapshot + eventos)
- Cache cliente com atualização otimista
- Upload de anexos
"""
