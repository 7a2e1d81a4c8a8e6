from app.api.http.health import router as health_router
from app.api.http.auth import router as auth_router
from app.api.http.users import router as users_router
from app.api.http.documents import router as documents_router
from app.api.http.sections import router as sections_router
from app.api.http.educations import router as educations_router
from app.api.http.experiences import router as experiences_router
from app.api.http.text_snippets import router as text_snippets_router
from app.api.http.skills import router as skills_router

__all__ = [
    "health_router",
    "auth_router",
    "users_router",
    "documents_router",
    "sections_router",
    "educations_router",
    "experiences_router",
    "text_snippets_router",
    "skills_router"
]
