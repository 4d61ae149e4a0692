"""Event identifiers exchanged over the event bus."""

# Environment signals consumed by the activity monitor.
CHAT_OPEN = "ui:chat:open"
CHAT_CLOSE = "ui:chat:close"
MESSAGE_SENT = "ui:message:sent"
PAGE_VISIBILITY = "ui:page:visibility"
PAGE_FOCUS = "ui:page:focus"
PAGE_RETURN = "ui:page:return"

# Scheduler triggers.
OUTER_TIP_SCHEDULE_SHOW = "ui:outer-tip:schedule-show"
OUTER_TIP_AUTO_HIDE = "ui:outer-tip:auto-hide"
OUTER_TIP_FOLLOW_UP_TRIGGER = "ui:outer-tip:follow-up-trigger"
OUTER_TIP_ACTIVE_RETURN_TRIGGER = "ui:outer-tip:active-return-trigger"
OUTER_TIP_RETURNING_TRIGGER = "ui:outer-tip:returning-trigger"
OUTER_TIP_RECONNECT_TRIGGER = "ui:outer-tip:reconnect-trigger"

# Decision outcomes for the presentation layer.
OUTER_TIP_SHOW = "ui:outer-tip:show"
OUTER_TIP_HIDE = "ui:outer-tip:hide"
