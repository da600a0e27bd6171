"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskPriority, TaskDraft, TaskUpdate)
- task_storage.py: key/value file store + whole-collection JSON persistence
- task_repository.py: in-memory collection kept in sync with storage
- task_view.py: filtering, sorting and pagination of the list view
"""
