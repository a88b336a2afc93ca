from .task_list_page import TaskListPage
from .task_detail_page import TaskDetailPage

__all__ = [
    "TaskListPage",
    "TaskDetailPage",
]
