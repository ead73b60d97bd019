"""Rebuild unsaved entities from submitted form data for redisplay."""
from .repository import REPOSITORIES


def candidate_from_form(kind, form, entity_id=None):
    """Return an unsaved ``kind`` entity carrying the form's sanitized values.

    In update mode ``entity_id`` is kept so the redisplayed form posts back to
    the same record.
    """
    return REPOSITORIES[kind].build(form.entity_fields(), entity_id=entity_id)
