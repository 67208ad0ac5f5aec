"""
EasyBuild Content API - Content Type Registry
===============================================

What:  One declaration per content type: its URL slug, MongoDB collection,
       payload schema and the behaviors that differ between types.
How:   Routes and services look a type up by slug and act on the declaration,
       so adding a type means adding one entry here.

Kinds of content:
    single-active   at most one document is active; GET returns that one
                    (banner, about-banner, about-us, team, step-by-step)
    listing         every active document is listed (project, service)
    ordered catalog listing sorted by `order`, many active at once
                    (social-media, wood)
"""

import enum
from dataclasses import dataclass
from typing import Dict, Tuple, Type

from pymongo import ASCENDING, DESCENDING

from easybuild.exceptions import NotFoundError
from easybuild.schemas.content import (
    AboutBannerPayload,
    AboutUsPayload,
    BannerPayload,
    ContentPayload,
    ProjectPayload,
    ServicePayload,
    SocialMediaPayload,
    StepByStepPayload,
    TeamPayload,
    WoodPayload,
)


class DeleteMode(enum.Enum):
    NONE = "none"  # DELETE answers 405
    HARD = "hard"  # document removed
    SOFT = "soft"  # isActive set to false


class SeedMode(enum.Enum):
    SKIP_IF_PRESENT = "skip_if_present"  # seed only an empty collection
    REPLACE = "replace"  # drop every document, then seed


@dataclass(frozen=True)
class ContentType:
    slug: str
    collection: str
    label: str
    payload: Type[ContentPayload]
    single_active: bool = False
    sort: Tuple[Tuple[str, int], ...] = (("createdAt", DESCENDING),)
    delete_mode: DeleteMode = DeleteMode.NONE
    auto_order: bool = False
    seed_mode: SeedMode = SeedMode.SKIP_IF_PRESENT

    @property
    def display_name(self) -> str:
        """Label with a capital first letter, for response messages."""
        return self.label[:1].upper() + self.label[1:]


CONTENT_TYPES: Dict[str, ContentType] = {
    content_type.slug: content_type
    for content_type in (
        ContentType(
            slug="banner",
            collection="banners",
            label="banner",
            payload=BannerPayload,
            single_active=True,
        ),
        ContentType(
            slug="about-banner",
            collection="aboutbanners",
            label="about banner",
            payload=AboutBannerPayload,
            single_active=True,
        ),
        ContentType(
            slug="about-us",
            collection="aboutus",
            label="about us section",
            payload=AboutUsPayload,
            single_active=True,
        ),
        ContentType(
            slug="team",
            collection="teams",
            label="team section",
            payload=TeamPayload,
            single_active=True,
        ),
        ContentType(
            slug="step-by-step",
            collection="stepbysteps",
            label="step by step section",
            payload=StepByStepPayload,
            single_active=True,
        ),
        ContentType(
            slug="project",
            collection="projects",
            label="project",
            payload=ProjectPayload,
            delete_mode=DeleteMode.HARD,
            seed_mode=SeedMode.REPLACE,
        ),
        ContentType(
            slug="service",
            collection="services",
            label="service",
            payload=ServicePayload,
            sort=(("createdAt", ASCENDING),),
            delete_mode=DeleteMode.SOFT,
        ),
        ContentType(
            slug="social-media",
            collection="socialmedias",
            label="social media link",
            payload=SocialMediaPayload,
            sort=(("order", ASCENDING),),
            delete_mode=DeleteMode.HARD,
        ),
        ContentType(
            slug="wood",
            collection="woods",
            label="wood",
            payload=WoodPayload,
            sort=(("order", ASCENDING), ("createdAt", DESCENDING)),
            delete_mode=DeleteMode.HARD,
            auto_order=True,
            seed_mode=SeedMode.REPLACE,
        ),
    )
}


def get_content_type(slug: str) -> ContentType:
    """Looks up a content type by URL slug; unknown slugs raise NotFoundError."""
    try:
        return CONTENT_TYPES[slug]
    except KeyError:
        raise NotFoundError(resource="content type", resource_id=slug) from None
