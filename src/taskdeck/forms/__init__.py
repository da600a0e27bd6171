"""Generic field validation (form.py) and the create/edit task form (task_form.py)."""
