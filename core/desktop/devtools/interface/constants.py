"""Interface-level constants for the taskdeck TUI."""

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
DATE_FORMAT = "%Y-%m-%d"

STATUS_TTL = 4.0
PAGE_SIZE = 10
TICK_INTERVAL = 1.0

LANG_PACK = {
    "en": {
        # task actions
        "STATUS_EDIT_HINT": "Tab between fields, Ctrl+Enter to save",
        "STATUS_TAGS_HINT": "Tab to Tags field, Enter to add tags",
        "STATUS_TASK_REOPENED": "Task reopened",
        "STATUS_TASK_COMPLETED": "Task completed!",
        "STATUS_PRIORITY": "Priority: {priority}",
        "STATUS_MOVE_HINT": "Select project to move task to",
        "STATUS_TASK_UPDATED": "Task updated",
        "STATUS_TASK_ADDED": "Task added",
        "STATUS_TASK_CREATED": "Task created",
        "STATUS_TASK_DELETED": "Task deleted",
        "STATUS_TASK_MOVED": "Task moved to {project}",
        "STATUS_TITLE_REQUIRED": "Title is required",
        "STATUS_QUICK_CAPTURE_HINT": "@project #tag !1-4 due:date, Tab expands",
        # projects
        "STATUS_PROJECT_NAME_HINT": "Enter project name, Tab to navigate",
        "STATUS_PROJECT_EDIT_HINT": "Edit project, Tab to navigate",
        "STATUS_SELECT_PROJECT_EDIT": "Select a project to edit (not 'All Tasks')",
        "STATUS_SELECT_PROJECT_DELETE": "Select a project to delete",
        "STATUS_INBOX_PROTECTED": "Cannot delete the Inbox project",
        "STATUS_PROJECT_CREATED": "Project created",
        "STATUS_PROJECT_UPDATED": "Project updated",
        "STATUS_PROJECT_NAME_REQUIRED": "Project name is required",
        "STATUS_PROJECT_MOVED_TO_INBOX": "Project deleted, tasks moved to Inbox",
        "STATUS_PROJECT_TASKS_DELETED": "Project and tasks deleted",
        # views / filters
        "STATUS_CALENDAR_ALL": "Showing all tasks",
        "STATUS_CALENDAR_ACTIVE": "Showing active tasks only",
        "STATUS_SEARCHING_IN": "Searching in: {project}",
        "STATUS_SELECTED": "Selected: {title}",
        "STATUS_FILTER_TODAY": "Showing tasks due today",
        "STATUS_FILTER_WEEK": "Showing tasks due this week",
        "STATUS_FILTER_PRIORITY": "Showing {priority} priority tasks",
        "STATUS_FILTER": "Filter: {filter}",
        "STATUS_FILTER_SORT": "Filter: {filter}, Sort: {sort}",
        # maintenance
        "STATUS_DATA_REFRESHED": "Data refreshed",
        "STATUS_DELETED_COMPLETED": "Deleted {count} completed task(s)",
        "STATUS_DATABASE_RESET": "Database reset: deleted {tasks} task(s) and {projects} project(s)",
        "STATUS_ERROR": "Error: {error}",
        # rendering
        "ALL_TASKS": "All Tasks",
        "PROJECTS": "Projects",
        "TASKS": "Tasks",
        "NO_TASKS": "No tasks",
        "NO_RESULTS": "No matching tasks",
        "NO_TASKS_FOR_DAY": "No tasks for this day",
        "SEARCH_TITLE": "Search Tasks",
        "SEARCH_IN": "Search in: {project}",
        "CALENDAR_TITLE": "Weekly Calendar",
        "DEBUG_TITLE": "Debug Logs (F12 to close)",
        "HELP_TITLE": "Keyboard Shortcuts",
        "DUE": "Due",
        "PRIORITY": "Priority",
        "STATUS": "Status",
        "TAGS": "Tags",
        "PROJECT": "Project",
        "DESCRIPTION": "Description",
        "HINT_MAIN": "a:add  e:edit  d:delete  space:toggle  p:priority  n:capture  /:search  c:calendar  f:filter  ?:help  q:quit",
        "HINT_CALENDAR": "h/l:day  k/j:week  t:today  Tab:tasks  a:completed  Enter:select  Esc:back",
        "HINT_DETAIL": "space:toggle  p:priority  e:edit  d:delete  Esc:back",
        "HINT_SEARCH": "type to search  ↑↓:select  Enter:open  Esc:cancel",
        "HINT_DEBUG": "space:focus  ↑↓:scroll  PgUp/PgDn:page  ←→:target level  +/-:level  H:targets  Esc:back",
    },
    "ru": {
        "STATUS_EDIT_HINT": "Tab: между полями, Ctrl+Enter: сохранить",
        "STATUS_TAGS_HINT": "Tab до поля тегов, Enter добавляет тег",
        "STATUS_TASK_REOPENED": "Задача снова открыта",
        "STATUS_TASK_COMPLETED": "Задача выполнена!",
        "STATUS_PRIORITY": "Приоритет: {priority}",
        "STATUS_MOVE_HINT": "Выберите проект для задачи",
        "STATUS_TASK_UPDATED": "Задача обновлена",
        "STATUS_TASK_ADDED": "Задача добавлена",
        "STATUS_TASK_CREATED": "Задача создана",
        "STATUS_TASK_DELETED": "Задача удалена",
        "STATUS_TASK_MOVED": "Задача перенесена в {project}",
        "STATUS_TITLE_REQUIRED": "Нужно название",
        "STATUS_QUICK_CAPTURE_HINT": "@проект #тег !1-4 due:дата, Tab: полная форма",
        "STATUS_PROJECT_NAME_HINT": "Введите название проекта, Tab: навигация",
        "STATUS_PROJECT_EDIT_HINT": "Редактирование проекта, Tab: навигация",
        "STATUS_SELECT_PROJECT_EDIT": "Выберите проект для редактирования (не 'Все задачи')",
        "STATUS_SELECT_PROJECT_DELETE": "Выберите проект для удаления",
        "STATUS_INBOX_PROTECTED": "Проект Inbox нельзя удалить",
        "STATUS_PROJECT_CREATED": "Проект создан",
        "STATUS_PROJECT_UPDATED": "Проект обновлён",
        "STATUS_PROJECT_NAME_REQUIRED": "Нужно название проекта",
        "STATUS_PROJECT_MOVED_TO_INBOX": "Проект удалён, задачи перенесены в Inbox",
        "STATUS_PROJECT_TASKS_DELETED": "Проект и задачи удалены",
        "STATUS_CALENDAR_ALL": "Показаны все задачи",
        "STATUS_CALENDAR_ACTIVE": "Показаны только активные задачи",
        "STATUS_SEARCHING_IN": "Поиск в: {project}",
        "STATUS_SELECTED": "Выбрано: {title}",
        "STATUS_FILTER_TODAY": "Задачи на сегодня",
        "STATUS_FILTER_WEEK": "Задачи на эту неделю",
        "STATUS_FILTER_PRIORITY": "Задачи с приоритетом {priority}",
        "STATUS_FILTER": "Фильтр: {filter}",
        "STATUS_FILTER_SORT": "Фильтр: {filter}, сортировка: {sort}",
        "STATUS_DATA_REFRESHED": "Данные обновлены",
        "STATUS_DELETED_COMPLETED": "Удалено выполненных задач: {count}",
        "STATUS_DATABASE_RESET": "База очищена: удалено задач {tasks}, проектов {projects}",
        "STATUS_ERROR": "Ошибка: {error}",
        "ALL_TASKS": "Все задачи",
        "PROJECTS": "Проекты",
        "TASKS": "Задачи",
        "NO_TASKS": "Нет задач",
        "NO_RESULTS": "Ничего не найдено",
        "NO_TASKS_FOR_DAY": "На этот день задач нет",
        "SEARCH_TITLE": "Поиск задач",
        "SEARCH_IN": "Поиск в: {project}",
        "CALENDAR_TITLE": "Календарь недели",
        "DEBUG_TITLE": "Журнал (F12 закрыть)",
        "HELP_TITLE": "Горячие клавиши",
        "DUE": "Срок",
        "PRIORITY": "Приоритет",
        "STATUS": "Статус",
        "TAGS": "Теги",
        "PROJECT": "Проект",
        "DESCRIPTION": "Описание",
    },
}

HELP_LINES = [
    ("j/k ↑/↓", "Move selection"),
    ("g/G", "Top / bottom"),
    ("Ctrl+D/Ctrl+U", "Page down / up"),
    ("Tab h/l", "Switch panel"),
    ("a", "Add task (project in sidebar)"),
    ("e / Enter", "Edit task (project in sidebar)"),
    ("d", "Delete task (project in sidebar)"),
    ("n", "Quick capture"),
    ("space", "Toggle completed"),
    ("p", "Cycle priority"),
    ("t", "Edit tags"),
    ("m", "Move to project"),
    ("v", "Task details"),
    ("/", "Search"),
    ("c", "Calendar"),
    ("T / W", "Due today / this week"),
    ("1-4", "Filter by priority"),
    ("F", "Cycle filter"),
    ("f", "Filter & sort"),
    ("S", "Settings"),
    ("r", "Refresh"),
    ("F12", "Debug logs"),
    ("q", "Quit"),
]
