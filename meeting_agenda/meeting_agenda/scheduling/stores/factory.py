"""
Store Factory

Factory pattern to get the correct store based on backend name.
"""

from .base import Store, StoreError


def get_store(backend: str = "frappe") -> Store:
	"""
	Factory para obtener el store correcto según backend.

	Args:
		backend: "frappe" (DocTypes del sitio) o "memory" (tests/scripts)

	Returns:
		Store: instancia del store

	Raises:
		StoreError: si el backend no es soportado
	"""
	if backend == "frappe":
		from .frappe_store import FrappeStore
		return FrappeStore()
	elif backend == "memory":
		from .memory import MemoryStore
		return MemoryStore()
	else:
		raise StoreError(f"Unsupported store backend: {backend}")
