"""Tests for MockBloggerService.

These check that the mock keeps the discovery client's call shape and
error behaviour, so client tests exercise realistic code paths.
"""

import pytest
from googleapiclient.errors import HttpError

from blogger_client.mock_blogger_service import (
    MockBlog,
    MockBloggerBackingStore,
    MockBloggerService,
    MockPost,
    http_error,
)


class TestMockBloggerBackingStore:
    def test_add_blog_sets_owner(self):
        store = MockBloggerBackingStore()
        blog = store.add_blog(MockBlog(name="A", url="http://a.example.com/"))
        assert blog.owner_id == store.user.id
        assert store.get_blog(blog.id) is blog

    def test_missing_blog_raises_404(self):
        store = MockBloggerBackingStore()
        with pytest.raises(HttpError) as exc_info:
            store.get_blog("nope")
        assert exc_info.value.resp.status == 404

    def test_post_scoped_to_blog(self):
        store = MockBloggerBackingStore()
        a = store.add_blog(MockBlog(id="A", name="A", url="http://a.example.com/"))
        store.add_blog(MockBlog(id="Z", name="Z", url="http://z.example.com/"))
        store.add_post(MockPost(id="P", blog_id=a.id))

        assert store.get_post("A", "P").id == "P"
        with pytest.raises(HttpError):
            store.get_post("Z", "P")


class TestMockBloggerService:
    def test_deferred_execution(self):
        store = MockBloggerBackingStore()
        store.add_blog(MockBlog(id="A", name="A", url="http://a.example.com/"))
        service = MockBloggerService(store)

        request = service.posts().insert(blogId="A", body={"title": "Later"})
        assert store.posts == {}

        created = request.execute()
        assert store.posts[created["id"]].title == "Later"

    def test_insert_draft(self):
        store = MockBloggerBackingStore()
        store.add_blog(MockBlog(id="A", name="A", url="http://a.example.com/"))
        service = MockBloggerService(store)

        created = service.posts().insert(blogId="A", body={}, isDraft=True).execute()
        assert created["status"] == "DRAFT"
        assert service.posts().publish(blogId="A", postId=created["id"]).execute()[
            "status"
        ] == "LIVE"

    def test_get_by_url(self):
        store = MockBloggerBackingStore()
        store.add_blog(MockBlog(id="A", name="A", url="http://a.example.com/"))
        service = MockBloggerService(store)
        assert service.blogs().getByUrl(url="http://a.example.com").execute()["id"] == "A"

    def test_other_users_blogs_forbidden(self):
        service = MockBloggerService()
        with pytest.raises(HttpError) as exc_info:
            service.blogs().listByUser(userId="someone-else").execute()
        assert exc_info.value.resp.status == 403

    def test_list_by_user_only_owned_blogs(self):
        store = MockBloggerBackingStore()
        store.add_blog(MockBlog(id="A", name="A", url="http://a.example.com/"))
        store.add_blog(
            MockBlog(
                id="Z", name="Z", url="http://z.example.com/", owner_id="someone-else"
            )
        )
        service = MockBloggerService(store)

        result = service.blogs().listByUser(userId="self").execute()
        assert [b["id"] for b in result["items"]] == ["A"]

    def test_builder_returns_service(self):
        service = MockBloggerService()
        assert service.builder()(object(), 30) is service


class TestHttpError:
    def test_reason_in_message(self):
        error = http_error(404, "Post not found: P")
        assert error.resp.status == 404
        assert "Post not found: P" in str(error)
