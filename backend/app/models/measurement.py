"""Measurement value object shared by profile and child records."""

from datetime import datetime

from sqlalchemy import DateTime, Float, func
from sqlalchemy.orm import Mapped, mapped_column

# (field, label, unit) in display order
MEASUREMENT_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("height_cm", "Height", "cm"),
    ("weight_kg", "Weight", "kg"),
    ("chest_cm", "Chest", "cm"),
    ("waist_cm", "Waist", "cm"),
    ("hips_cm", "Hips", "cm"),
    ("inseam_cm", "Inseam", "cm"),
    ("shoe_size", "Shoe Size", ""),
)

MEASUREMENT_FIELD_NAMES: tuple[str, ...] = tuple(f for f, _, _ in MEASUREMENT_FIELDS)


class MeasurementColumns:
    """Mixin with the seven optional body measurements plus ``updated_at``."""

    height_cm: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    chest_cm: Mapped[float | None] = mapped_column(Float, nullable=True)
    waist_cm: Mapped[float | None] = mapped_column(Float, nullable=True)
    hips_cm: Mapped[float | None] = mapped_column(Float, nullable=True)
    inseam_cm: Mapped[float | None] = mapped_column(Float, nullable=True)
    shoe_size: Mapped[float | None] = mapped_column(Float, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False,
    )


def format_measurement(value: float | None, unit: str) -> str:
    """Render a single measurement for display, e.g. ``"172.5 cm"``."""
    if value is None:
        return "Not set"
    text = f"{value:g}"
    return f"{text} {unit}" if unit else text
