"""VoteOnComment — record a helpful/not helpful vote on a comment.

A user holds at most one vote per comment; voting again replaces it.
"""

from reviews.comment.comment import Comment
from reviews.comment.repository import CommentRepository
from shared.command import Command


class VoteOnComment(Command):
    comment_id: str
    user_id: str
    vote: str


class VoteOnCommentHandler:
    def __init__(self, comments: CommentRepository):
        self.comments = comments

    def vote_on_comment(self, command: VoteOnComment) -> Comment:
        comment = self.comments.get(command.comment_id)
        comment.vote(user_id=command.user_id, vote=command.vote)
        self.comments.add(comment)
        return comment
