"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_API_BASE_URL = "https://backend01-proyecto-jovenes-phru.vercel.app"

# The resolver asks for an effectively unbounded page.
PERSON_SEARCH_LIMIT = 1000
DIRECTORY_LIMIT = 100

PREFILL_SESSION_KEY = "prefill_persona"
DUPLICATE_KEY_CODE = "DUPLICATE_KEY"

MSG_SEARCH_FAILED = "Error al buscar. Intenta de nuevo."
MSG_NOT_FOUND = "No se encontró una persona con esos datos."
MSG_NO_ACTIVITY_TODAY = "No hay actividades programadas para hoy."
MSG_MARK_FAILED = "No se pudo registrar la asistencia automáticamente."
MSG_BATCH_FAILED = "No se pudo registrar la asistencia de todas las personas seleccionadas."
MSG_RETRY = "Ocurrió un error. Intenta de nuevo."

TITLE_MARKED = "¡Asistencia Registrada!"
TITLE_ALREADY_MARKED = "Asistencia ya registrada"

MSG_REGISTERED = "¡Gracias por registrarte en el Grupo de Jóvenes con Propósito!"
MSG_REGISTERED_ATTENDED = "¡Y por asistir a la clase de hoy!"
MSG_REGISTERED_FOLLOWUP = " Pronto recibirás información sobre las actividades de los Jóvenes."
MSG_REGISTRATION_FAILED = "No se pudo completar el registro. Intenta de nuevo."
