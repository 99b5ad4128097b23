"""
Settings for ontology authoring, read from the environment.

Values can be placed in a ``.env`` file next to the working directory:

    ONTOLOGY_ANNOTATION_LANGUAGE=cs
    ONTOLOGY_IRI_SEPARATOR=#
"""

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


class AuthoringSettings(BaseModel):
    """Configuration options for entity naming and annotations."""

    annotation_language: str = Field(default="en", description="Language tag for label/comment literals")
    iri_separator: str = Field(default="#", description="Separator between ontology IRI and entity name")


@lru_cache(maxsize=1)
def get_settings() -> AuthoringSettings:
    """Return the process-wide settings, read once from the environment."""
    return AuthoringSettings(
        annotation_language=os.getenv("ONTOLOGY_ANNOTATION_LANGUAGE", "en"),
        iri_separator=os.getenv("ONTOLOGY_IRI_SEPARATOR", "#"),
    )
