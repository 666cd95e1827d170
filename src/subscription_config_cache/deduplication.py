"""Deduplicação de chamadas concorrentes (single-flight)."""

import asyncio
import copy
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _consume_exception(task: "asyncio.Task[Any]") -> None:
    """Evita 'Task exception was never retrieved' quando todos os waiters saíram."""
    if not task.cancelled():
        task.exception()


def _copy_exception(error: Exception) -> Exception:
    """Cópia rasa da falha para cada waiter, mantendo tipo, args e atributos."""
    try:
        return copy.copy(error)
    except Exception:
        # __init__ exige argumentos que não estão em args
        logger.debug(f"Não foi possível copiar {type(error).__name__}; propagando a original")
        return error


class TaskDeduplicator(Generic[T]):
    """Colapsa chamadas concorrentes de uma mesma operação em uma única execução.

    Enquanto uma execução do producer está em andamento, toda chamada a
    ``run()`` aguarda essa mesma execução em vez de iniciar outra. Quando
    ela termina (sucesso ou falha) o slot é liberado e a próxima chamada
    inicia uma execução nova. Falhas não são cacheadas.

    Exemplo:
        ```python
        async def fetch_config():
            return await client.fetch_configuration()

        dedup = TaskDeduplicator("fetch_config", fetch_config)

        # Apenas um fetch é executado, mesmo com 10 chamadas
        results = await asyncio.gather(*[dedup.run() for _ in range(10)])
        ```
    """

    def __init__(self, name: str, producer: Callable[[], Awaitable[T]]) -> None:
        """Inicializa o deduplicador.

        Args:
            name: Nome usado nos logs
            producer: Função async sem argumentos que produz o valor
        """
        self._name = name
        self._producer = producer
        self._task: asyncio.Task[T] | None = None

    @property
    def name(self) -> str:
        """Nome da operação deduplicada."""
        return self._name

    @property
    def is_pending(self) -> bool:
        """Indica se há uma execução em andamento."""
        return self._task is not None

    async def run(self) -> T:
        """Executa o producer ou aguarda a execução em andamento.

        Returns:
            Cópia independente do resultado da execução

        Raises:
            Exception: Propaga a falha do producer para todos os waiters
        """
        # Sem await entre a verificação e o registro: não há preempção aqui
        task = self._task
        if task is None:
            logger.debug(f"Iniciando execução de: {self._name}")
            task = asyncio.get_running_loop().create_task(self._execute())
            task.add_done_callback(_consume_exception)
            self._task = task
        else:
            logger.debug(f"Aguardando execução existente de: {self._name}")

        # shield: cancelar um waiter não cancela a execução compartilhada
        try:
            result = await asyncio.shield(task)
        except Exception as e:
            error = _copy_exception(e)
            if error is e:
                raise
            raise error from e
        return copy.deepcopy(result)

    async def _execute(self) -> T:
        try:
            return await self._producer()
        except Exception as e:
            logger.debug(f"Execução de {self._name} falhou: {e}")
            raise
        finally:
            self._task = None
