"""
EasyBuild Content API - Content Payload Schemas
=================================================

What:  Pydantic models describing the stored shape of every content type.
How:   A payload is validated with `model_validate()` on create, and again
       after merging on update, then dumped `by_alias=True` so MongoDB keeps
       the camelCase keys the front end reads (`isActive`, `mainImage`, ...).
       Timestamps and `_id` are assigned by the service layer, not here.
"""

from typing import Annotated, List, Optional

from pydantic import Field, StringConstraints

from easybuild.schemas.common import CamelModel, LocalizedText

# Required path/URL or label: trimmed, at least one character
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ContentPayload(CamelModel):
    """Fields shared by every content type."""

    is_active: bool = True


# ── Single-active content blocks ──────────────────────────────────────────


class BannerPayload(ContentPayload):
    """Home page hero banner."""

    title: LocalizedText
    subtitle: LocalizedText
    image: NonEmptyStr


class AboutBannerPayload(ContentPayload):
    """Hero banner of the about page (image plus background video)."""

    title: LocalizedText
    subtitle: LocalizedText
    image: NonEmptyStr
    video: NonEmptyStr


class AboutUsPayload(ContentPayload):
    title: LocalizedText
    description: LocalizedText
    mission_description: LocalizedText
    images: List[NonEmptyStr] = Field(min_length=1)


class TeamPayload(ContentPayload):
    title: LocalizedText
    first_description: LocalizedText
    second_description: LocalizedText
    image: NonEmptyStr


class StepByStepPayload(ContentPayload):
    """The "how we build" section; the layout needs at least three images."""

    title: LocalizedText
    description: LocalizedText
    images: List[NonEmptyStr] = Field(min_length=3)


# ── Listings ──────────────────────────────────────────────────────────────


class ProjectPayload(ContentPayload):
    title: LocalizedText
    description: LocalizedText
    main_image: NonEmptyStr
    additional_images: List[NonEmptyStr] = Field(default_factory=list)


class StepImage(CamelModel):
    image: NonEmptyStr
    title_key: NonEmptyStr


class WallImage(CamelModel):
    image: NonEmptyStr
    title: str = ""


class CustomWall(CamelModel):
    name: NonEmptyStr
    images: List[WallImage] = Field(default_factory=list)


class ServicePayload(ContentPayload):
    """
    A construction service with its detail page galleries.

    `exterior_wall` / `interior_wall` toggle the two standard wall galleries;
    `custom_walls` holds any further named galleries.
    """

    title: LocalizedText
    description: LocalizedText
    description2: LocalizedText
    image: NonEmptyStr
    hover_image: str = ""
    step_images: List[StepImage] = Field(default_factory=list)
    exterior_wall: bool = False
    interior_wall: bool = False
    exterior_wall_images: List[WallImage] = Field(default_factory=list)
    interior_wall_images: List[WallImage] = Field(default_factory=list)
    custom_walls: List[CustomWall] = Field(default_factory=list)


# ── Ordered catalogs (several entries active at once) ─────────────────────


class SocialMediaPayload(ContentPayload):
    platform: NonEmptyStr
    icon: NonEmptyStr
    url: NonEmptyStr
    order: int = 0


class WoodPayload(ContentPayload):
    """Material catalog entry. A missing order is assigned after the last entry."""

    title: LocalizedText
    image_url: NonEmptyStr
    order: Optional[int] = None
