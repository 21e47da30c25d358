"""Task list view-model and file import/export."""

from tarefas.viewmodel.import_export import (
    ExportedFile,
    export_csv,
    export_json,
    normalize_imported_task,
    process_file,
)
from tarefas.viewmodel.task_form import TaskForm, TaskFormViewModel
from tarefas.viewmodel.task_list import (
    TaskFilters,
    TaskListState,
    TaskListViewModel,
    apply_filters,
    derive_visible_page,
    paginate,
    sort_tasks_list,
)

__all__ = [
    "ExportedFile",
    "TaskFilters",
    "TaskForm",
    "TaskFormViewModel",
    "TaskListState",
    "TaskListViewModel",
    "apply_filters",
    "derive_visible_page",
    "export_csv",
    "export_json",
    "normalize_imported_task",
    "paginate",
    "process_file",
    "sort_tasks_list",
]
