import pytest


@pytest.fixture()
def submit_comment(comments, products, orders):
    """Submit a review through the handler, defaulting everything but the product."""
    from reviews.comment.submission import SubmitComment, SubmitCommentHandler

    def _submit(product, user_id="user-1", rating=5, is_admin=False, **overrides):
        defaults = {"title": "Great", "comment": "Works as advertised"}
        defaults.update(overrides)
        command = SubmitComment(user_id=user_id, product_id=product.id, rating=rating, is_admin=is_admin, **defaults)
        return SubmitCommentHandler(comments, products, orders).submit_comment(command)

    return _submit


@pytest.fixture()
def approve(comments, products):
    from reviews.comment.comment import CommentStatus
    from reviews.comment.moderation import ModerateComment, ModerateCommentHandler

    def _approve(comment):
        command = ModerateComment(comment_id=comment.id, status=CommentStatus.APPROVED, moderated_by="admin-1")
        return ModerateCommentHandler(comments, products).moderate_comment(command)

    return _approve
