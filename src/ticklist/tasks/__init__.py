"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Category, StatusFilter, SortOrder)
- validator.py: normalization + add/edit validation
- projection.py: filtered/sorted views and statistics
- notifications.py: single replaceable toast with tagged actions
- soft_delete.py: mark -> timed commit deletion with undo
- persistence.py: debounced writes to the key-value store
- serializer.py: JSON export + all-or-nothing import
- task_store.py: SQLite-backed key-value store
- task_api.py: TaskListApp, the facade front-ends talk to
"""
