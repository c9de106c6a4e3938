"""Names of the planner commands."""

PREFIX = "planner"

BUCKET_ADD = f"{PREFIX} bucket add"
BUCKET_GET = f"{PREFIX} bucket get"
BUCKET_LIST = f"{PREFIX} bucket list"
BUCKET_SET = f"{PREFIX} bucket set"
BUCKET_REMOVE = f"{PREFIX} bucket remove"
PLAN_ADD = f"{PREFIX} plan add"
PLAN_GET = f"{PREFIX} plan get"
PLAN_LIST = f"{PREFIX} plan list"
PLAN_REMOVE = f"{PREFIX} plan remove"
PLAN_SET = f"{PREFIX} plan set"
ROSTER_ADD = f"{PREFIX} roster add"
ROSTER_REMOVE = f"{PREFIX} roster remove"
TASK_ADD = f"{PREFIX} task add"
TASK_CHECKLISTITEM_ADD = f"{PREFIX} task checklistitem add"
TASK_CHECKLISTITEM_LIST = f"{PREFIX} task checklistitem list"
TASK_CHECKLISTITEM_REMOVE = f"{PREFIX} task checklistitem remove"
TASK_GET = f"{PREFIX} task get"
TASK_LIST = f"{PREFIX} task list"
TASK_REFERENCE_ADD = f"{PREFIX} task reference add"
TASK_REFERENCE_LIST = f"{PREFIX} task reference list"
TASK_REFERENCE_REMOVE = f"{PREFIX} task reference remove"
TASK_REMOVE = f"{PREFIX} task remove"
TASK_SET = f"{PREFIX} task set"
TENANT_SETTINGS_LIST = f"{PREFIX} tenant settings list"
TENANT_SETTINGS_SET = f"{PREFIX} tenant settings set"
