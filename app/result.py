"""
Resultado explícito de las operaciones de dominio.

Los servicios devuelven ``Success`` o ``Failure`` en lugar de lanzar excepciones
para los fallos esperados (no encontrado, sin permiso, datos inválidos...).
Las excepciones quedan reservadas para errores inesperados.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure(Generic[E]):
    value: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True


Result = Union[Success[T], Failure[E]]
