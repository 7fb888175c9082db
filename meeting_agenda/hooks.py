app_name = "meeting_agenda"
app_title = "Meeting Agenda"
app_publisher = "Sebastian Ortiz Valencia"
app_description = "Agendamiento de reuniones entre usuarios con agenda BUSY/FREE por usuario"
app_email = "sebastianortiz989@gmail.com"
app_license = "mit"

# Apps
# ------------------

# required_apps = []

# Each item in the list will be shown as an app in the apps page
# add_to_apps_screen = [
# 	{
# 		"name": "meeting_agenda",
# 		"logo": "/assets/meeting_agenda/logo.png",
# 		"title": "Meet Scheduling",
# 		"route": "/meeting_agenda",
# 		"has_permission": "meeting_agenda.api.permission.has_app_permission"
# 	}
# ]

# Includes in <head>
# ------------------

# include js, css files in header of desk.html
# app_include_css = "/assets/meeting_agenda/css/meeting_agenda.css"
# app_include_js = "/assets/meeting_agenda/js/meeting_agenda.js"

# include js, css files in header of web template
# web_include_css = "/assets/meeting_agenda/css/meeting_agenda.css"
# web_include_js = "/assets/meeting_agenda/js/meeting_agenda.js"

# include custom scss in every website theme (without file extension ".scss")
# website_theme_scss = "meeting_agenda/public/scss/website"

# include js, css files in header of web form
# webform_include_js = {"doctype": "public/js/doctype.js"}
# webform_include_css = {"doctype": "public/css/doctype.css"}

# include js in page
# page_js = {"page" : "public/js/file.js"}

# include js in doctype views
# doctype_js = {"doctype" : "public/js/doctype.js"}
# doctype_list_js = {"doctype" : "public/js/doctype_list.js"}
# doctype_tree_js = {"doctype" : "public/js/doctype_tree.js"}
# doctype_calendar_js = {"doctype" : "public/js/doctype_calendar.js"}

# Svg Icons
# ------------------
# include app icons in desk
# app_include_icons = "meeting_agenda/public/icons.svg"

# Home Pages
# ----------

# application home page (will override Website Settings)
# home_page = "login"

# website user home page (by Role)
# role_home_page = {
# 	"Role": "home_page"
# }

# Generators
# ----------

# automatically create page for each record of this doctype
# website_generators = ["Web Page"]

# Jinja
# ----------

# add methods and filters to jinja environment
# jinja = {
# 	"methods": "meeting_agenda.utils.jinja_methods",
# 	"filters": "meeting_agenda.utils.jinja_filters"
# }

# Installation
# ------------

# before_install = "meeting_agenda.install.before_install"
after_install = "meeting_agenda.install.after_install"

# Uninstallation
# ------------

# before_uninstall = "meeting_agenda.uninstall.before_uninstall"
# after_uninstall = "meeting_agenda.uninstall.after_uninstall"

# Integration Setup
# ------------------
# To set up dependencies/integrations with other apps
# Name of the app being installed is passed as an argument

# before_app_install = "meeting_agenda.utils.before_app_install"
# after_app_install = "meeting_agenda.utils.after_app_install"

# Integration Cleanup
# -------------------
# To clean up dependencies/integrations with other apps
# Name of the app being uninstalled is passed as an argument

# before_app_uninstall = "meeting_agenda.utils.before_app_uninstall"
# after_app_uninstall = "meeting_agenda.utils.after_app_uninstall"

# Desk Notifications
# ------------------
# See frappe.core.notifications.get_notification_config

# notification_config = "meeting_agenda.notifications.get_notification_config"

# Permissions
# -----------
# Permissions evaluated in scripted ways

# permission_query_conditions = {
# 	"Event": "frappe.desk.doctype.event.event.get_permission_query_conditions",
# }
#
# has_permission = {
# 	"Event": "frappe.desk.doctype.event.event.has_permission",
# }

# DocType Class
# ---------------
# Override standard doctype classes

# override_doctype_class = {
# 	"ToDo": "custom_app.overrides.CustomToDo"
# }

# Document Events
# ---------------
# Hook on document methods and events

doc_events = {
	"User": {
		"on_trash": "meeting_agenda.meeting_agenda.scheduling.cascade.on_user_trash"
	}
}

# Scheduled Tasks
# ---------------

scheduler_events = {
	"daily": [
		"meeting_agenda.meeting_agenda.scheduling.tasks.cleanup_orphan_agenda_entries"
	]
}

# Otros scheduled tasks (comentados por ahora)
# scheduler_events = {
# 	"all": [
# 		"meeting_agenda.tasks.all"
# 	],
# 	"daily": [
# 		"meeting_agenda.tasks.daily"
# 	],
# 	"hourly": [
# 		"meeting_agenda.tasks.hourly"
# 	],
# 	"weekly": [
# 		"meeting_agenda.tasks.weekly"
# 	],
# 	"monthly": [
# 		"meeting_agenda.tasks.monthly"
# 	],
# }

# Testing
# -------

# before_tests = "meeting_agenda.install.before_tests"

# Overriding Methods
# ------------------------------
#
# override_whitelisted_methods = {
# 	"frappe.desk.doctype.event.event.get_events": "meeting_agenda.event.get_events"
# }
#
# each overriding function accepts a `data` argument;
# generated from the base implementation of the doctype dashboard,
# along with any modifications made in other Frappe apps
# override_doctype_dashboards = {
# 	"Task": "meeting_agenda.task.get_dashboard_data"
# }

# exempt linked doctypes from being automatically cancelled
#
# auto_cancel_exempted_doctypes = ["Auto Repeat"]

# Ignore links to specified DocTypes when deleting documents
# -----------------------------------------------------------

# ignore_links_on_delete = ["Communication", "ToDo"]

# Request Events
# ----------------
# before_request = ["meeting_agenda.utils.before_request"]
# after_request = ["meeting_agenda.utils.after_request"]

# Job Events
# ----------
# before_job = ["meeting_agenda.utils.before_job"]
# after_job = ["meeting_agenda.utils.after_job"]

# User Data Protection
# --------------------

# user_data_fields = [
# 	{
# 		"doctype": "{doctype_1}",
# 		"filter_by": "{filter_by}",
# 		"redact_fields": ["{field_1}", "{field_2}"],
# 		"partial": 1,
# 	},
# 	{
# 		"doctype": "{doctype_2}",
# 		"filter_by": "{filter_by}",
# 		"partial": 1,
# 	},
# 	{
# 		"doctype": "{doctype_3}",
# 		"strict": False,
# 	},
# 	{
# 		"doctype": "{doctype_4}"
# 	}
# ]

# Authentication and authorization
# --------------------------------

# auth_hooks = [
# 	"meeting_agenda.auth.validate"
# ]

# Automatically update python controller files with type annotations for this app.
# export_python_type_annotations = True

# default_log_clearing_doctypes = {
# 	"Logging DocType Name": 30  # days to retain logs
# }

