"""Locale string tables and the per-form locale resolver."""

import logging
from collections.abc import Mapping

logger = logging.getLogger(__name__)

BASELINE_LOCALE = "en_US"

# ---------------------------------------------------------------------------
# Built-in tables
#
# Flat lookups keyed by dotted path.  Adapters always pass a literal fallback,
# so a table only needs the keys it wants to override.
# ---------------------------------------------------------------------------

LOCALES = {
    "en_US": {
        "filter.norecords": "No results",
        "filter.placeholder": "Filter",
        "select.empty": "Please select",
        "message.success": "Saved successfully.",
        "message.error": "Please correct the errors below.",
        "pending.label": "Please wait...",
        "upload.browse": "Browse files",
        "upload.empty": "No files selected",
        "resource.empty": "No resource selected",
        "checkbox.checked": "Yes",
        "checkbox.unchecked": "No",
        "datetimepicker.locale": "en",
        "datetimepicker.dateFormat": "MM/DD/YYYY",
        "datetimepicker.timeFormat": "h:mm A",
    },
    "de_DE": {
        "filter.norecords": "Keine Ergebnisse",
        "filter.placeholder": "Filtern",
        "select.empty": "Bitte wählen",
        "message.success": "Erfolgreich gespeichert.",
        "message.error": "Bitte korrigieren Sie die markierten Felder.",
        "pending.label": "Bitte warten...",
        "upload.browse": "Dateien auswählen",
        "upload.empty": "Keine Dateien ausgewählt",
        "resource.empty": "Keine Ressource ausgewählt",
        "checkbox.checked": "Ja",
        "checkbox.unchecked": "Nein",
        "datetimepicker.locale": "de",
        "datetimepicker.dateFormat": "DD.MM.YYYY",
        "datetimepicker.timeFormat": "HH:mm",
    },
    "fr_FR": {
        "filter.norecords": "Aucun résultat",
        "filter.placeholder": "Filtrer",
        "select.empty": "Veuillez choisir",
        "message.success": "Enregistré avec succès.",
        "message.error": "Veuillez corriger les erreurs ci-dessous.",
        "pending.label": "Veuillez patienter...",
        "upload.browse": "Parcourir",
        "upload.empty": "Aucun fichier sélectionné",
        "resource.empty": "Aucune ressource sélectionnée",
        "checkbox.checked": "Oui",
        "checkbox.unchecked": "Non",
        "datetimepicker.locale": "fr",
        "datetimepicker.dateFormat": "DD/MM/YYYY",
        "datetimepicker.timeFormat": "HH:mm",
    },
    "nl_NL": {
        "filter.norecords": "Geen resultaten",
        "filter.placeholder": "Filteren",
        "select.empty": "Maak een keuze",
        "message.success": "Succesvol opgeslagen.",
        "message.error": "Corrigeer de onderstaande fouten.",
        "pending.label": "Even geduld...",
        "upload.browse": "Bestanden kiezen",
        "upload.empty": "Geen bestanden geselecteerd",
        "resource.empty": "Geen bron geselecteerd",
        "checkbox.checked": "Ja",
        "checkbox.unchecked": "Nee",
        "datetimepicker.locale": "nl",
        "datetimepicker.dateFormat": "DD-MM-YYYY",
        "datetimepicker.timeFormat": "HH:mm",
    },
}


def available_locales():
    return sorted(LOCALES)


def translate(table, key, default=None):
    """Look up *key* in a flat locale table, returning *default* when absent."""
    if not table:
        return default
    value = table.get(key)
    return default if value is None else value


def section(table, prefix):
    """Collect every ``prefix.*`` key of *table* into a dict without the prefix.

    ``section(table, "datetimepicker")`` turns ``datetimepicker.locale`` into
    ``{"locale": ...}``.
    """
    lead = f"{prefix}."
    return {
        key[len(lead):]: value
        for key, value in (table or {}).items()
        if key.startswith(lead)
    }


class LocaleResolver:
    """Resolve a locale name or inline table to a flat string table.

    One resolver belongs to one form instance and remembers the last table it
    handed out.  An unknown locale name keeps that table (the baseline on a
    fresh resolver) and logs a single warning.
    """

    def __init__(self, locales=None, baseline=BASELINE_LOCALE):
        self.locales = LOCALES if locales is None else locales
        if baseline not in self.locales:
            raise KeyError(f"Baseline locale {baseline!r} is not registered")
        self.baseline = baseline
        self.active = dict(self.locales[baseline])

    def resolve(self, locale_input=None):
        if locale_input is None:
            self.active = dict(self.locales[self.baseline])
        elif isinstance(locale_input, str):
            table = self.locales.get(locale_input)
            if table is None:
                logger.warning(
                    "Locale %s not implemented, keeping the active table", locale_input
                )
            else:
                self.active = dict(table)
        elif isinstance(locale_input, Mapping):
            self.active = dict(locale_input)
        else:
            raise TypeError(
                f"Locale must be a name, a mapping or None, got {type(locale_input).__name__}"
            )
        return dict(self.active)
