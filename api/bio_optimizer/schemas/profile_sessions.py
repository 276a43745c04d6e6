"""Profile session and bio variant Pydantic schemas."""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from bio_optimizer.models.profile_session import BioVariant, ProfileSession

MAX_TEXT_LENGTH = 65536  # 64KB

Text = Annotated[str, Field(max_length=MAX_TEXT_LENGTH)]


def _isoformat(value: datetime) -> str:
    """Render a timestamp with an explicit UTC offset."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class CamelModel(BaseModel):
    """Base model using camelCase on the wire and snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PartialUpdate(CamelModel):
    """
    Base for sparse update payloads.

    Only fields the client actually sent are applied; an omitted field is
    left untouched while an explicit ``null`` clears it.
    """

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided to update.")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly present in the payload, by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


# --- Profile sessions ---


class CreateProfileSessionRequest(CamelModel):
    """Request to create a profile session. Every field is optional."""

    current_headline: Text | None = None
    current_about: Text | None = None
    current_title: Text | None = None
    industry: Text | None = None
    location: Text | None = None
    goals: Text | None = None


class UpdateProfileSessionRequest(PartialUpdate):
    """Request to update a profile session; at least one field is required."""

    current_headline: Text | None = None
    current_about: Text | None = None
    current_title: Text | None = None
    industry: Text | None = None
    location: Text | None = None
    goals: Text | None = None


class ProfileSessionResponse(CamelModel):
    """A profile session as returned to its owner."""

    id: str
    user_id: str
    current_headline: str | None
    current_about: str | None
    current_title: str | None
    industry: str | None
    location: str | None
    goals: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_model(cls, session: ProfileSession) -> "ProfileSessionResponse":
        return cls(
            id=str(session.id),
            user_id=str(session.user_id),
            current_headline=session.current_headline,
            current_about=session.current_about,
            current_title=session.current_title,
            industry=session.industry,
            location=session.location,
            goals=session.goals,
            created_at=_isoformat(session.created_at),
            updated_at=_isoformat(session.updated_at),
        )


class SessionData(CamelModel):
    session: ProfileSessionResponse


class SessionEnvelope(CamelModel):
    """Success envelope for create/update of a session."""

    success: bool = True
    data: SessionData


class SessionListData(CamelModel):
    items: list[ProfileSessionResponse]
    total: int


class SessionListEnvelope(CamelModel):
    """Success envelope for listing sessions."""

    success: bool = True
    data: SessionListData


# --- Bio variants ---


class AddBioVariantRequest(CamelModel):
    """Request to add a variant to a session."""

    variant_label: Text | None = None
    headline: Text | None = None
    about_text: Text
    tone: Text | None = None
    length_hint: Text | None = None
    is_favorite: bool = False

    @field_validator("about_text")
    @classmethod
    def validate_about_text(cls, v: str) -> str:
        """About text is the variant's content and cannot be empty."""
        if not v:
            raise ValueError("About text cannot be empty")
        return v


class UpdateBioVariantRequest(PartialUpdate):
    """Request to update a variant; at least one field is required."""

    variant_label: Text | None = None
    headline: Text | None = None
    about_text: Text | None = None
    tone: Text | None = None
    length_hint: Text | None = None
    is_favorite: bool | None = None

    # Validators only run on values the client sent, so omission stays allowed.
    @field_validator("about_text")
    @classmethod
    def validate_about_text(cls, v: str | None) -> str:
        """About text may be omitted but never cleared."""
        if not v:
            raise ValueError("About text cannot be empty")
        return v

    @field_validator("is_favorite")
    @classmethod
    def validate_is_favorite(cls, v: bool | None) -> bool:
        if v is None:
            raise ValueError("isFavorite cannot be null")
        return v


class BioVariantResponse(CamelModel):
    """A bio variant."""

    id: str
    session_id: str
    variant_label: str | None
    headline: str | None
    about_text: str
    tone: str | None
    length_hint: str | None
    is_favorite: bool
    created_at: str

    @classmethod
    def from_model(cls, variant: BioVariant) -> "BioVariantResponse":
        return cls(
            id=str(variant.id),
            session_id=str(variant.session_id),
            variant_label=variant.variant_label,
            headline=variant.headline,
            about_text=variant.about_text,
            tone=variant.tone,
            length_hint=variant.length_hint,
            is_favorite=variant.is_favorite,
            created_at=_isoformat(variant.created_at),
        )


class VariantData(CamelModel):
    variant: BioVariantResponse


class VariantEnvelope(CamelModel):
    """Success envelope for add/update of a variant."""

    success: bool = True
    data: VariantData


class VariantListData(CamelModel):
    items: list[BioVariantResponse]
    total: int


class VariantListEnvelope(CamelModel):
    """Success envelope for listing variants."""

    success: bool = True
    data: VariantListData
