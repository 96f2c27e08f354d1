"""Comment aggregate — a customer's review of a product.

One comment per (user, product), checked at submission. Moderation moves a
comment between three statuses; only ``approved`` and active comments are
public and count towards the product's rating::

    pending ⇄ approved ⇄ rejected

Non-admin edits send a comment back to ``pending``. Deletion is soft.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.exceptions import ValidationError
from shared.repository import Document, new_id


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class CommentStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class VoteType(Enum):
    HELPFUL = "helpful"
    NOT_HELPFUL = "not_helpful"


# ---------------------------------------------------------------------------
# Embedded entities
# ---------------------------------------------------------------------------
class CommentImage(BaseModel):
    url: str = Field(min_length=1, max_length=500)
    public_id: str = Field(min_length=1, max_length=255)


class HelpfulVote(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    user_id: str
    vote: VoteType
    created_at: datetime


class Reply(BaseModel):
    id: str = Field(default_factory=new_id)
    user_id: str
    user_name: str | None = None
    comment: str = Field(min_length=1, max_length=500)
    is_admin_reply: bool = False
    created_at: datetime


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
class Comment(Document):
    user_id: str
    user_name: str | None = None
    product_id: str
    rating: int = Field(ge=1, le=5)
    title: str = Field(min_length=1, max_length=100)
    comment: str = Field(min_length=1, max_length=1000)
    images: list[CommentImage] = Field(default_factory=list)
    is_verified_purchase: bool = False
    helpful_votes: list[HelpfulVote] = Field(default_factory=list)
    is_helpful: int = 0
    replies: list[Reply] = Field(default_factory=list)
    status: CommentStatus = CommentStatus.PENDING
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("title", "comment", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(
        cls,
        user_id,
        product_id,
        rating,
        title,
        comment,
        images=None,
        user_name=None,
        is_verified_purchase=False,
        auto_approve=False,
    ):
        now = datetime.now(UTC)
        return cls(
            user_id=str(user_id),
            user_name=user_name,
            product_id=str(product_id),
            rating=rating,
            title=title,
            comment=comment,
            images=images or [],
            is_verified_purchase=is_verified_purchase,
            status=CommentStatus.APPROVED if auto_approve else CommentStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_public(self) -> bool:
        return self.is_active and CommentStatus(self.status) == CommentStatus.APPROVED

    def is_written_by(self, user_id) -> bool:
        return self.user_id == str(user_id)

    # -------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------
    def edit(self, rating=None, title=None, comment=None, images=None, by_admin=False):
        """Apply the given changes; admins' edits stay approved, anyone else's go back to pending."""
        if rating is not None:
            self.rating = rating
        if title is not None:
            self.title = title
        if comment is not None:
            self.comment = comment
        if images is not None:
            self.images = images

        self.status = CommentStatus.APPROVED if by_admin else CommentStatus.PENDING
        self.updated_at = datetime.now(UTC)

    def remove(self):
        self.is_active = False
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------
    def moderate(self, status):
        self.status = CommentStatus(status)
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Replies & votes
    # -------------------------------------------------------------------
    def add_reply(self, user_id, comment, user_name=None, is_admin_reply=False) -> Reply:
        if not comment or not comment.strip():
            raise ValidationError({"comment": ["Reply text is required"]})

        now = datetime.now(UTC)
        reply = Reply(
            user_id=str(user_id),
            user_name=user_name,
            comment=comment.strip(),
            is_admin_reply=is_admin_reply,
            created_at=now,
        )
        self.replies = [*self.replies, reply]
        self.updated_at = now
        return reply

    def vote(self, user_id, vote):
        """Record a helpfulness vote; a second vote by the same user replaces the first."""
        try:
            vote = VoteType(vote)
        except ValueError:
            raise ValidationError({"vote": ["Invalid vote type"]}) from None

        now = datetime.now(UTC)
        votes = [existing for existing in self.helpful_votes if existing.user_id != str(user_id)]
        votes.append(HelpfulVote(user_id=str(user_id), vote=vote, created_at=now))

        self.helpful_votes = votes
        self.is_helpful = sum(1 for existing in votes if VoteType(existing.vote) == VoteType.HELPFUL)
        self.updated_at = now
