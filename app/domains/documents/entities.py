from datetime import datetime
from typing import Optional, Dict, Any, List

from app.core.errors import argument_error


class Document:
    """A resume; every user has exactly one master document"""

    UPDATABLE_FIELDS = ("document_name", "is_template", "is_locked")
    MASTER_UPDATABLE_FIELDS = ("document_name",)

    def __init__(
        self,
        id: int,
        document_name: str,
        owner: str,
        created_on: datetime,
        last_updated: Optional[datetime] = None,
        is_master: bool = False,
        is_template: bool = False,
        is_locked: bool = False
    ):
        self.id = id
        self.document_name = document_name
        self.owner = owner
        self.created_on = created_on
        self.last_updated = last_updated
        self.is_master = is_master
        self.is_template = is_template
        self.is_locked = is_locked

    def check_update(self, props: Dict[str, Any]) -> None:
        """Master documents only accept a new name.

        Raises a bad request error when the payload of a master update holds
        anything other than document_name, or leaves document_name out.
        """
        if not self.is_master or not props:
            return

        if "document_name" not in props or set(props) - set(self.MASTER_UPDATABLE_FIELDS):
            raise argument_error(
                "Only document name can be updated for primary resume templates."
            )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Document(id={self.id}, name={self.document_name}, master={self.is_master})"


class DocumentContent(Document):
    """A document together with everything shown on it, in position order"""

    def __init__(
        self,
        document: Document,
        contact_info=None,
        sections: Optional[List] = None,
        educations: Optional[List] = None,
        experiences: Optional[List] = None,
        skills: Optional[List] = None
    ):
        super().__init__(**vars(document))
        self.contact_info = contact_info
        self.sections = sections or []
        self.educations = educations or []
        self.experiences = experiences or []
        self.skills = skills or []
