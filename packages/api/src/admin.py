# This project was developed with assistance from AI tools.
"""
SQLAdmin configuration for database administration UI

Access the admin panel at: http://localhost:8000/admin

When AUTH_DISABLED=false, requires admin credentials via login form.
When AUTH_DISABLED=true, admin panel is open (dev mode).

Roles and assignments are read-only here: grants must go through the role
assignment writer so the tenant invariant holds.
"""

from db import (
    AnimalParcelData,
    GrainParcelData,
    Polygon,
    PolygonEntry,
    Role,
    Task,
    User,
    UserRole,
)
from sqladmin import Admin, ModelView
from sqladmin.authentication import AuthenticationBackend
from sqlalchemy import create_engine
from starlette.requests import Request
from starlette.responses import Response

from .core.config import settings

# SQLAdmin requires a sync engine; derive from the async DATABASE_URL
_sync_url = settings.DATABASE_URL.replace("+asyncpg", "")
engine = create_engine(_sync_url, echo=False)


class AdminAuth(AuthenticationBackend):
    """Session-based auth gate for SQLAdmin.

    When AUTH_DISABLED=true, authenticate() always returns True (dev mode).
    Otherwise, requires login with SQLADMIN_USER / SQLADMIN_PASSWORD.
    """

    async def login(self, request: Request) -> bool:
        form = await request.form()
        username = form.get("username")
        password = form.get("password")
        if username == settings.SQLADMIN_USER and password == settings.SQLADMIN_PASSWORD:
            request.session.update({"admin_authenticated": True})
            return True
        return False

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> Response | bool:
        if settings.AUTH_DISABLED:
            return True
        return request.session.get("admin_authenticated", False)


class UserAdmin(ModelView, model=User):
    column_list = [User.id, User.username, User.email, User.name, User.last_name, User.created_at]
    column_searchable_list = [User.username, User.email, User.last_name]
    column_sortable_list = [User.username, User.created_at]
    column_default_sort = [(User.created_at, True)]
    name = "User"
    name_plural = "Users"
    icon = "fa-solid fa-user"


class RoleAdmin(ModelView, model=Role):
    column_list = [Role.id, Role.role_name, Role.created_by_user_id, Role.created_at]
    column_searchable_list = [Role.role_name]
    column_sortable_list = [Role.role_name, Role.created_at]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Role"
    name_plural = "Roles"
    icon = "fa-solid fa-id-badge"


class UserRoleAdmin(ModelView, model=UserRole):
    column_list = [UserRole.user_id, UserRole.role_id, UserRole.assigned_at]
    column_default_sort = [(UserRole.assigned_at, True)]
    can_create = False
    can_edit = False
    can_delete = False
    name = "Assignment"
    name_plural = "Assignments"
    icon = "fa-solid fa-link"


class PolygonAdmin(ModelView, model=Polygon):
    column_list = [
        Polygon.polygon_id,
        Polygon.polygon_name,
        Polygon.created_by_user_id,
        Polygon.created_date,
    ]
    column_searchable_list = [Polygon.polygon_name]
    column_sortable_list = [Polygon.polygon_name, Polygon.created_date]
    column_default_sort = [(Polygon.created_date, True)]
    name = "Polygon"
    name_plural = "Polygons"
    icon = "fa-solid fa-draw-polygon"


class PolygonEntryAdmin(ModelView, model=PolygonEntry):
    column_list = [
        PolygonEntry.polygon_entry_id,
        PolygonEntry.polygon_id,
        PolygonEntry.created_by_user_id,
        PolygonEntry.category,
        PolygonEntry.value,
        PolygonEntry.created_date,
    ]
    column_searchable_list = [PolygonEntry.category]
    column_default_sort = [(PolygonEntry.created_date, True)]
    name = "Polygon Entry"
    name_plural = "Polygon Entries"
    icon = "fa-solid fa-list"


class GrainParcelDataAdmin(ModelView, model=GrainParcelData):
    column_list = [
        GrainParcelData.id,
        GrainParcelData.polygon_id,
        GrainParcelData.crop_type,
        GrainParcelData.season,
        GrainParcelData.created_date,
    ]
    name = "Grain Parcel"
    name_plural = "Grain Parcels"
    icon = "fa-solid fa-wheat-awn"


class AnimalParcelDataAdmin(ModelView, model=AnimalParcelData):
    column_list = [
        AnimalParcelData.id,
        AnimalParcelData.polygon_id,
        AnimalParcelData.animal_type,
        AnimalParcelData.number_of_animals,
        AnimalParcelData.created_date,
    ]
    name = "Animal Parcel"
    name_plural = "Animal Parcels"
    icon = "fa-solid fa-cow"


class TaskAdmin(ModelView, model=Task):
    column_list = [
        Task.id,
        Task.title,
        Task.status,
        Task.created_by_user_id,
        Task.assigned_to_user_id,
        Task.created_at,
    ]
    column_searchable_list = [Task.title, Task.status]
    column_default_sort = [(Task.created_at, True)]
    name = "Task"
    name_plural = "Tasks"
    icon = "fa-solid fa-list-check"


def setup_admin(app):
    """Set up SQLAdmin and mount it to the FastAPI app."""
    auth_backend = AdminAuth(
        secret_key=settings.SQLADMIN_SECRET_KEY,
    )
    admin = Admin(app, engine, title="Farmland Admin", authentication_backend=auth_backend)
    admin.add_view(UserAdmin)
    admin.add_view(RoleAdmin)
    admin.add_view(UserRoleAdmin)
    admin.add_view(PolygonAdmin)
    admin.add_view(PolygonEntryAdmin)
    admin.add_view(GrainParcelDataAdmin)
    admin.add_view(AnimalParcelDataAdmin)
    admin.add_view(TaskAdmin)
    return admin
