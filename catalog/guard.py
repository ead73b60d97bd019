import logging
from dataclasses import dataclass, field

from .models import db
from .repository import REPOSITORIES, authors, books

logger = logging.getLogger(__name__)

# Repositories whose dependents block deletion. Genres and copies are never blocked.
BLOCKING = {"author": authors, "book": books}


@dataclass
class DeleteOutcome:
    deleted: bool
    dependents: list = field(default_factory=list)

    @property
    def blocked(self):
        return not self.deleted


def guarded_delete(kind, entity_id):
    """Delete ``entity_id`` unless something still references it.

    The dependent read and the delete share one session transaction. Raises
    NotFoundError when the entity does not exist.
    """
    repository = REPOSITORIES[kind]
    repository.get(entity_id)
    blocking = BLOCKING.get(kind)
    dependents = blocking.find_dependents(entity_id) if blocking else []
    if dependents:
        logger.warning(
            "Refusing to delete %s %s: %d dependent(s)", kind, entity_id, len(dependents)
        )
        return DeleteOutcome(deleted=False, dependents=dependents)
    repository.delete(entity_id, commit=False)
    db.session.commit()
    return DeleteOutcome(deleted=True)
