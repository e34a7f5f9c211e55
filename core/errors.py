"""
Errori del dominio. Le funzioni pure sollevano, l'interfaccia mostra st.error.
"""


class PlannerError(Exception):
    """Base per tutti gli errori del planner."""


class ValidationError(PlannerError, ValueError):
    """Input non valido: cambio <= 0, data di inizio dopo la fine, nome vuoto..."""


class NotFoundError(PlannerError, LookupError):
    """Cliente o prenotazione inesistente."""


class PersistenceError(PlannerError):
    """Lettura o scrittura dei file JSON fallita (o file corrotto)."""
