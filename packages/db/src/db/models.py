# This project was developed with assistance from AI tools.
"""
Farmland domain models

Users, creator-scoped roles and their assignments, plus the owned records
(polygons, polygon entries, parcel data) whose visibility the access scope
resolver governs.
"""

import uuid

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base


class User(Base):
    """Local profile for an authenticated identity."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(150), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user_roles = relationship("UserRole", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"


class Role(Base):
    """A role defined by one administrator.

    Role names are unique per creator only; two administrators may each own a
    role called "Harvester".
    """

    __tablename__ = "roles"
    __table_args__ = (
        UniqueConstraint("role_name", "created_by_user_id", name="uq_role_name_creator"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    role_name = Column(String(100), nullable=False)
    created_by_user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user_roles = relationship("UserRole", back_populates="role", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Role(id={self.id}, name='{self.role_name}', creator={self.created_by_user_id})>"


class UserRole(Base):
    """Assignment: the user currently holds the role."""

    __tablename__ = "user_roles"

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    role_id = Column(
        Uuid, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True, index=True,
    )
    assigned_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="user_roles")
    role = relationship("Role", back_populates="user_roles")

    def __repr__(self):
        return f"<UserRole(user_id={self.user_id}, role_id={self.role_id})>"


class Polygon(Base):
    """Field boundary drawn by a user."""

    __tablename__ = "polygons"

    polygon_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    polygon_name = Column(String(200), nullable=False, index=True)
    created_by_user_id = Column(Uuid, nullable=False, index=True)
    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    points = relationship(
        "PolygonPoint",
        back_populates="polygon",
        cascade="all, delete-orphan",
        order_by="PolygonPoint.order",
        passive_deletes=True,
    )
    grain_parcels = relationship(
        "GrainParcelData",
        back_populates="polygon",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    animal_parcels = relationship(
        "AnimalParcelData",
        back_populates="polygon",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Polygon(id={self.polygon_id}, name='{self.polygon_name}')>"


class PolygonPoint(Base):
    """Ordered vertex of a polygon."""

    __tablename__ = "polygon_points"

    point_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    polygon_id = Column(
        Uuid, ForeignKey("polygons.polygon_id", ondelete="CASCADE"), nullable=False, index=True,
    )
    latitude = Column(Numeric(18, 6), nullable=False)
    longitude = Column(Numeric(18, 6), nullable=False)
    order = Column(Integer, nullable=False, default=0)

    polygon = relationship("Polygon", back_populates="points")

    def __repr__(self):
        return f"<PolygonPoint(polygon_id={self.polygon_id}, order={self.order})>"


class PolygonEntry(Base):
    """Categorised measurement recorded by a user, optionally tied to a polygon."""

    __tablename__ = "polygon_entries"

    polygon_entry_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    polygon_id = Column(Uuid, nullable=True, index=True)
    created_by_user_id = Column(Uuid, nullable=False, index=True)
    category = Column(String(100), nullable=False)
    value = Column(Numeric(18, 4), nullable=False)
    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<PolygonEntry(id={self.polygon_entry_id}, category='{self.category}')>"


class GrainParcelData(Base):
    """Crop data for a polygon."""

    __tablename__ = "grain_parcel_data"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    polygon_id = Column(
        Uuid, ForeignKey("polygons.polygon_id", ondelete="CASCADE"), nullable=False, index=True,
    )
    crop_type = Column(String(100), nullable=False)
    parcel_area = Column(Numeric(12, 4), nullable=True)
    irrigation_type = Column(String(100), nullable=True)
    fertilizer_used = Column(Numeric(12, 4), nullable=True)
    pesticide_used = Column(Numeric(12, 4), nullable=True)
    yield_amount = Column("yield", Numeric(12, 4), nullable=True)
    soil_type = Column(String(100), nullable=True)
    season = Column(String(50), nullable=True)
    water_usage = Column(Numeric(12, 4), nullable=True)
    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    polygon = relationship("Polygon", back_populates="grain_parcels")

    def __repr__(self):
        return f"<GrainParcelData(id={self.id}, crop='{self.crop_type}')>"


class AnimalParcelData(Base):
    """Livestock data for a polygon. At most one row per polygon is kept."""

    __tablename__ = "animal_parcel_data"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    polygon_id = Column(
        Uuid, ForeignKey("polygons.polygon_id", ondelete="CASCADE"), nullable=False, index=True,
    )
    animal_type = Column(String(100), nullable=False)
    number_of_animals = Column(Integer, nullable=False, default=0)
    feed_type = Column(String(100), nullable=False, default="")
    water_consumption = Column(Numeric(12, 4), nullable=False, default=0)
    veterinary_visits = Column(Integer, nullable=False, default=0)
    waste_management = Column(Text, nullable=False, default="")
    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    polygon = relationship("Polygon", back_populates="animal_parcels")

    def __repr__(self):
        return f"<AnimalParcelData(id={self.id}, animal='{self.animal_type}')>"


class Task(Base):
    """Work item one user assigns to another.

    ``version`` is the optimistic-lock counter: an update or delete issued
    against a stale version matches no row and surfaces as a conflict.
    """

    __tablename__ = "tasks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, default="Assigned")
    created_by_user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    assigned_to_user_id = Column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    created_by_user = relationship("User", foreign_keys=[created_by_user_id])
    assigned_to_user = relationship("User", foreign_keys=[assigned_to_user_id])

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', status='{self.status}')>"
