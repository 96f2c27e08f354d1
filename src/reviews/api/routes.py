"""FastAPI routes for the Reviews context.

Each route translates between request schemas (external contract) and
commands (internal domain concepts).
"""

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from catalog.product.repository import ProductRepository
from ordering.order.repository import OrderRepository
from reviews.api.schemas import (
    AddReplyRequest,
    EditCommentRequest,
    SubmitCommentRequest,
    UpdateCommentStatusRequest,
    VoteRequest,
)
from reviews.comment.editing import EditComment, EditCommentHandler, RemoveComment
from reviews.comment.listing import CommentQueries
from reviews.comment.moderation import ModerateComment, ModerateCommentHandler
from reviews.comment.reply import AddReply, AddReplyHandler
from reviews.comment.repository import CommentRepository
from reviews.comment.submission import SubmitComment, SubmitCommentHandler
from reviews.comment.voting import VoteOnComment, VoteOnCommentHandler
from shared.api import respond
from shared.auth import Actor, admin_only, get_current_actor
from shared.db import get_database

comment_router = APIRouter(prefix="/comments", tags=["comments"])


def get_comments(database: Database = Depends(get_database)) -> CommentRepository:
    return CommentRepository(database)


def get_products(database: Database = Depends(get_database)) -> ProductRepository:
    return ProductRepository(database)


@comment_router.get("/product/{product_id}")
def list_product_comments(
    product_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    rating: int | None = Query(None, ge=1, le=5),
    sort: str | None = None,
    comments: CommentRepository = Depends(get_comments),
    products: ProductRepository = Depends(get_products),
):
    data = CommentQueries(comments, products).list_product_comments(
        product_id, page=page, limit=limit, rating=rating, sort=sort
    )
    return respond(data, "Comments retrieved successfully")


@comment_router.post("")
def submit_comment(
    body: SubmitCommentRequest,
    actor: Actor = Depends(get_current_actor),
    database: Database = Depends(get_database),
):
    handler = SubmitCommentHandler(CommentRepository(database), ProductRepository(database), OrderRepository(database))
    command = SubmitComment(
        user_id=actor.id,
        user_name=actor.name,
        is_admin=actor.is_admin,
        product_id=body.product_id,
        rating=body.rating,
        title=body.title,
        comment=body.comment,
        images=[image.model_dump() for image in body.images],
    )
    comment = handler.submit_comment(command)
    return respond({"comment": comment}, "Comment created successfully", status_code=201)


@comment_router.get("")
def list_all_comments(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: str | None = None,
    product: str | None = None,
    user: str | None = None,
    sort: str | None = None,
    actor: Actor = Depends(admin_only),
    comments: CommentRepository = Depends(get_comments),
    products: ProductRepository = Depends(get_products),
):
    data = CommentQueries(comments, products).list_all_comments(
        page=page, limit=limit, status=status, product_id=product, user_id=user, sort=sort
    )
    return respond(data, "Comments retrieved successfully")


@comment_router.get("/stats")
def comment_stats(
    actor: Actor = Depends(admin_only),
    comments: CommentRepository = Depends(get_comments),
    products: ProductRepository = Depends(get_products),
):
    return respond(CommentQueries(comments, products).comment_stats(), "Comment statistics retrieved successfully")


@comment_router.put("/{comment_id}")
def edit_comment(
    comment_id: str,
    body: EditCommentRequest,
    actor: Actor = Depends(get_current_actor),
    comments: CommentRepository = Depends(get_comments),
    products: ProductRepository = Depends(get_products),
):
    command = EditComment(
        comment_id=comment_id,
        user_id=actor.id,
        is_admin=actor.is_admin,
        rating=body.rating,
        title=body.title,
        comment=body.comment,
        images=None if body.images is None else [image.model_dump() for image in body.images],
    )
    comment = EditCommentHandler(comments, products).edit_comment(command)
    return respond({"comment": comment}, "Comment updated successfully")


@comment_router.delete("/{comment_id}")
def remove_comment(
    comment_id: str,
    actor: Actor = Depends(get_current_actor),
    comments: CommentRepository = Depends(get_comments),
    products: ProductRepository = Depends(get_products),
):
    EditCommentHandler(comments, products).remove_comment(
        RemoveComment(comment_id=comment_id, user_id=actor.id, is_admin=actor.is_admin)
    )
    return respond(None, "Comment deleted successfully")


@comment_router.post("/{comment_id}/replies")
def add_reply(
    comment_id: str,
    body: AddReplyRequest,
    actor: Actor = Depends(get_current_actor),
    comments: CommentRepository = Depends(get_comments),
):
    command = AddReply(
        comment_id=comment_id,
        user_id=actor.id,
        user_name=actor.name,
        is_admin=actor.is_admin,
        comment=body.comment,
    )
    comment = AddReplyHandler(comments).add_reply(command)
    return respond({"comment": comment}, "Reply added successfully", status_code=201)


@comment_router.post("/{comment_id}/vote")
def vote_on_comment(
    comment_id: str,
    body: VoteRequest,
    actor: Actor = Depends(get_current_actor),
    comments: CommentRepository = Depends(get_comments),
):
    comment = VoteOnCommentHandler(comments).vote_on_comment(
        VoteOnComment(comment_id=comment_id, user_id=actor.id, vote=body.vote)
    )
    return respond({"comment": comment}, "Vote recorded successfully")


@comment_router.put("/{comment_id}/status")
def update_comment_status(
    comment_id: str,
    body: UpdateCommentStatusRequest,
    actor: Actor = Depends(admin_only),
    comments: CommentRepository = Depends(get_comments),
    products: ProductRepository = Depends(get_products),
):
    comment = ModerateCommentHandler(comments, products).moderate_comment(
        ModerateComment(comment_id=comment_id, status=body.status, moderated_by=actor.id)
    )
    return respond({"comment": comment}, "Comment status updated successfully")
