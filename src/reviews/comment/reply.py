"""AddReply — any signed-in user answers a comment; admin replies are flagged."""

from pydantic import Field

from reviews.comment.comment import Comment
from reviews.comment.repository import CommentRepository
from shared.command import Command


class AddReply(Command):
    comment_id: str
    user_id: str
    user_name: str | None = None
    is_admin: bool = False
    comment: str = Field(min_length=1, max_length=500)


class AddReplyHandler:
    def __init__(self, comments: CommentRepository):
        self.comments = comments

    def add_reply(self, command: AddReply) -> Comment:
        comment = self.comments.get(command.comment_id)
        comment.add_reply(
            user_id=command.user_id,
            comment=command.comment,
            user_name=command.user_name,
            is_admin_reply=command.is_admin,
        )
        self.comments.add(comment)
        return comment
