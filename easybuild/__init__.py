"""
EasyBuild Content API - Package Initializer
============================================

What: The backend that stores and serves the multilingual content blocks of
      the EasyBuild marketing site (banners, team, projects, services,
      social media links and the material catalog).
Who:  Imported by uvicorn (`easybuild.main:app`), pytest, and the services.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, envelope responses
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← CRUD, single-active enforcement
    ├─────────────────────────────────────┤
    │   Models (registry) & Schemas       │  ← content types + pydantic payloads
    ├─────────────────────────────────────┤
    │   Database (ConnectionCache)        │  ← one MongoDB handle per process
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
