from app.domains.identity.entities import User, ContactInfo

__all__ = ["User", "ContactInfo"]
