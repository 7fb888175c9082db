"""
Stores Module

Provides persistence backends for the scheduling core:
- Base store interface (base.py)
- Factory for getting the right store (factory.py)
- Frappe DocTypes implementation (frappe_store.py)
- In-memory implementation (memory.py)
"""
