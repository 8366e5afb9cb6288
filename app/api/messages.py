"""Human readable envelope messages.

Polish is the product language; English is shipped for API consumers and tests.
"""

from __future__ import annotations

from app.core.settings import get_settings

CATALOG: dict[str, dict[str, str]] = {
    "pl": {
        "patients_listed": "Pacjenci zostali pobrani pomyślnie",
        "patient_created": "Pacjent został utworzony pomyślnie",
        "patient_shown": "Pacjent został pobrany pomyślnie",
        "patient_updated": "Pacjent został zaktualizowany pomyślnie",
        "patient_deleted": "Pacjent został usunięty pomyślnie",
        "invalid_fields": "Podane pola są nieprawidłowe",
        "validation_failed": "Przesłane dane są nieprawidłowe",
        "patient_not_found": "Nie znaleziono pacjenta",
        "unauthenticated": "Brak autoryzacji",
        "error": "Wystąpił błąd",
    },
    "en": {
        "patients_listed": "Patients retrieved successfully",
        "patient_created": "Patient created successfully",
        "patient_shown": "Patient retrieved successfully",
        "patient_updated": "Patient updated successfully",
        "patient_deleted": "Patient deleted successfully",
        "invalid_fields": "The given fields are invalid",
        "validation_failed": "The given data was invalid",
        "patient_not_found": "Patient not found",
        "unauthenticated": "Unauthenticated",
        "error": "An error occurred",
    },
}


def message(key: str) -> str:
    """Translate a message key into the configured locale, falling back to the key."""

    locale = get_settings().app_locale
    return CATALOG.get(locale, CATALOG["pl"]).get(key, key)
