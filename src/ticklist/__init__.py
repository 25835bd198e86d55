"""
ticklist: personal task list engine.

Sub-packages:
- core: ports, state store, cancellable timers
- tasks: models, validation, projection, soft delete, notifications, persistence, import/export
- connectors: concrete file/console collaborators and the console front-end
- cli: composition root, slash commands, entrypoint
"""
