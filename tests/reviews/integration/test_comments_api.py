"""API tests for the comment endpoints."""


def _post_review(client, headers, product, **overrides):
    payload = {"product_id": product.id, "rating": 5, "title": "Brilliant", "comment": "Vivid colours"}
    payload.update(overrides)
    return client.post("/api/comments", json=payload, headers=headers)


class TestCommentEndpoints:
    def test_submit_requires_a_token(self, client, make_product):
        response = _post_review(client, {}, make_product())

        assert response.status_code == 401

    def test_submit_and_reject_second_review(self, client, user_headers, make_product):
        product = make_product()

        first = _post_review(client, user_headers, product)
        second = _post_review(client, user_headers, product, rating=1)

        assert first.status_code == 201
        assert first.json()["data"]["comment"]["status"] == "pending"
        assert second.status_code == 400
        assert second.json()["message"] == "You have already reviewed this product"

    def test_public_list_after_approval(self, client, user_headers, admin_headers, make_product):
        product = make_product()
        comment_id = _post_review(client, user_headers, product, rating=4).json()["data"]["comment"]["id"]

        before = client.get(f"/api/comments/product/{product.id}").json()["data"]
        assert before["comments"] == []

        approved = client.put(f"/api/comments/{comment_id}/status", json={"status": "approved"}, headers=admin_headers)
        assert approved.status_code == 200

        after = client.get(f"/api/comments/product/{product.id}").json()["data"]
        assert [comment["id"] for comment in after["comments"]] == [comment_id]
        assert after["rating_stats"]["average_rating"] == 4
        assert after["rating_stats"]["rating_distribution"]["4"] == 1

        product_view = client.get(f"/api/products/{product.id}").json()["data"]["product"]
        assert product_view["ratings"] == {"average": 4, "count": 1}

    def test_moderation_is_admin_only(self, client, user_headers, make_product):
        comment_id = _post_review(client, user_headers, make_product()).json()["data"]["comment"]["id"]

        response = client.put(f"/api/comments/{comment_id}/status", json={"status": "approved"}, headers=user_headers)

        assert response.status_code == 403

    def test_invalid_moderation_status(self, client, user_headers, admin_headers, make_product):
        comment_id = _post_review(client, user_headers, make_product()).json()["data"]["comment"]["id"]

        response = client.put(f"/api/comments/{comment_id}/status", json={"status": "hidden"}, headers=admin_headers)

        assert response.status_code == 400

    def test_other_users_cannot_edit(self, client, user_headers, auth_headers, make_product):
        comment_id = _post_review(client, user_headers, make_product()).json()["data"]["comment"]["id"]

        response = client.put(f"/api/comments/{comment_id}", json={"rating": 1}, headers=auth_headers(user_id="user-2"))

        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to update this comment"

    def test_reply_and_vote(self, client, user_headers, admin_headers, make_product):
        comment_id = _post_review(client, user_headers, make_product()).json()["data"]["comment"]["id"]

        reply = client.post(f"/api/comments/{comment_id}/replies", json={"comment": "Thanks!"}, headers=admin_headers)
        vote = client.post(f"/api/comments/{comment_id}/vote", json={"vote": "helpful"}, headers=admin_headers)
        bad_vote = client.post(f"/api/comments/{comment_id}/vote", json={"vote": "meh"}, headers=admin_headers)

        assert reply.status_code == 201
        assert reply.json()["data"]["comment"]["replies"][0]["is_admin_reply"] is True
        assert vote.json()["data"]["comment"]["is_helpful"] == 1
        assert bad_vote.status_code == 400
        assert bad_vote.json()["message"] == "Invalid vote type"

    def test_delete_is_soft(self, client, user_headers, admin_headers, make_product):
        comment_id = _post_review(client, user_headers, make_product()).json()["data"]["comment"]["id"]

        deleted = client.delete(f"/api/comments/{comment_id}", headers=user_headers)
        listed = client.get("/api/comments", headers=admin_headers).json()["data"]["comments"]

        assert deleted.json()["message"] == "Comment deleted successfully"
        assert listed[0]["is_active"] is False

    def test_stats(self, client, user_headers, admin_headers, make_product):
        _post_review(client, user_headers, make_product())

        stats = client.get("/api/comments/stats", headers=admin_headers).json()["data"]

        assert stats["status_stats"]["pending"] == 1
        assert len(stats["recent_comments"]) == 1

    def test_submit_with_product_id_key(self, client, user_headers, make_product):
        product = make_product()

        response = client.post(
            "/api/comments",
            json={"productId": product.id, "rating": 4, "title": "Crisp", "comment": "Great picture"},
            headers=user_headers,
        )

        assert response.status_code == 201
        assert response.json()["data"]["comment"]["product_id"] == product.id
