# apps/board/registry.py

import threading
from collections import defaultdict
from typing import Dict, Set


class ConnectionRegistry:
    """
    Conexões vivas deste processo, agrupadas por conta

    O fan-out em si é feito pelos grupos do channel layer; o registro
    serve para presença e para o health check. add/discard são O(1) e
    discard é idempotente.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._conexoes: Dict[str, Set[str]] = defaultdict(set)

    def add(self, account_id, channel_name: str):
        with self._lock:
            self._conexoes[str(account_id)].add(channel_name)

    def discard(self, account_id, channel_name: str):
        with self._lock:
            chave = str(account_id)
            canais = self._conexoes.get(chave)
            if canais is None:
                return
            canais.discard(channel_name)
            if not canais:
                del self._conexoes[chave]

    def connections(self, account_id) -> Set[str]:
        with self._lock:
            return set(self._conexoes.get(str(account_id), ()))

    def count(self) -> int:
        with self._lock:
            return sum(len(canais) for canais in self._conexoes.values())

    def clear(self):
        with self._lock:
            self._conexoes.clear()


connection_registry = ConnectionRegistry()
