"""Mock Blogger service for testing without real API calls.

The mock mirrors the shape of the object returned by
``googleapiclient.discovery.build("blogger", "v3")``:
``service.posts().get(blogId=..., postId=...).execute()``.

Usage:
    from blogger_client.mock_blogger_service import (
        MockBloggerBackingStore,
        MockBloggerService,
    )

    store = MockBloggerBackingStore()
    blog = store.add_blog(MockBlog(name="Notes", url="http://notes.example.com/"))
    service = MockBloggerService(store)

    client = BloggerClient(session, blog_id=blog.id,
                           service_builder=lambda creds, timeout: service)
"""

import json
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import httplib2
from googleapiclient.errors import HttpError
from pydantic import BaseModel, Field

SELF_USER_ID = "self"


def _new_id() -> str:
    return str(uuid.uuid4().int)[:19]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def http_error(status: int, message: str, reason: str = "notFound") -> HttpError:
    """Build an HttpError like the ones the discovery client raises."""
    resp = httplib2.Response({"status": status})
    content = json.dumps(
        {
            "error": {
                "code": status,
                "message": message,
                "errors": [{"reason": reason, "message": message}],
            }
        }
    ).encode()
    return HttpError(resp, content)


class MockUser(BaseModel):
    id: str = Field(default_factory=_new_id)
    displayName: str = "Mock User"

    def to_resource(self) -> Dict[str, Any]:
        return {"kind": "blogger#user", "id": self.id, "displayName": self.displayName}


class MockBlog(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str
    url: str
    description: str = ""
    owner_id: Optional[str] = None

    def to_resource(self) -> Dict[str, Any]:
        return {
            "kind": "blogger#blog",
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "description": self.description,
        }


class MockPost(BaseModel):
    """A post or a page; Blogger gives both the same core fields."""

    id: str = Field(default_factory=_new_id)
    blog_id: str
    kind: str = "blogger#post"
    title: str = ""
    content: str = ""
    status: str = "LIVE"
    labels: List[str] = Field(default_factory=list)
    published: str = Field(default_factory=_now)
    updated: str = Field(default_factory=_now)

    def to_resource(self) -> Dict[str, Any]:
        resource = {
            "kind": self.kind,
            "id": self.id,
            "blog": {"id": self.blog_id},
            "title": self.title,
            "content": self.content,
            "status": self.status,
            "published": self.published,
            "updated": self.updated,
        }
        if self.kind == "blogger#post":
            resource["labels"] = self.labels
        return resource

    def apply(self, body: Dict[str, Any], replace: bool) -> None:
        fields = ("title", "content", "labels")
        for field in fields:
            if field in body:
                setattr(self, field, body[field])
            elif replace:
                setattr(self, field, [] if field == "labels" else "")
        self.updated = _now()


class MockComment(BaseModel):
    id: str = Field(default_factory=_new_id)
    blog_id: str
    post_id: str
    content: str = ""
    status: str = "pending"

    def to_resource(self) -> Dict[str, Any]:
        return {
            "kind": "blogger#comment",
            "id": self.id,
            "blog": {"id": self.blog_id},
            "post": {"id": self.post_id},
            "content": self.content,
            "status": self.status,
        }


class MockBloggerBackingStore(BaseModel):
    """State shared by mock services, standing in for Blogger itself."""

    user: MockUser = Field(default_factory=MockUser)
    blogs: Dict[str, MockBlog] = Field(default_factory=dict)
    posts: Dict[str, MockPost] = Field(default_factory=dict)
    pages: Dict[str, MockPost] = Field(default_factory=dict)
    comments: Dict[str, MockComment] = Field(default_factory=dict)

    def add_blog(self, blog: MockBlog) -> MockBlog:
        if blog.owner_id is None:
            blog.owner_id = self.user.id
        self.blogs[blog.id] = blog
        return blog

    def add_post(self, post: MockPost) -> MockPost:
        self.posts[post.id] = post
        return post

    def add_page(self, page: MockPost) -> MockPost:
        page.kind = "blogger#page"
        self.pages[page.id] = page
        return page

    def add_comment(self, comment: MockComment) -> MockComment:
        self.comments[comment.id] = comment
        return comment

    def get_blog(self, blog_id: str) -> MockBlog:
        blog = self.blogs.get(blog_id)
        if blog is None:
            raise http_error(404, f"Blog not found: {blog_id}")
        return blog

    def get_post(self, blog_id: str, post_id: str) -> MockPost:
        self.get_blog(blog_id)
        post = self.posts.get(post_id)
        if post is None or post.blog_id != blog_id:
            raise http_error(404, f"Post not found: {post_id}")
        return post

    def get_page(self, blog_id: str, page_id: str) -> MockPost:
        self.get_blog(blog_id)
        page = self.pages.get(page_id)
        if page is None or page.blog_id != blog_id:
            raise http_error(404, f"Page not found: {page_id}")
        return page

    def get_comment(self, blog_id: str, post_id: str, comment_id: str) -> MockComment:
        self.get_post(blog_id, post_id)
        comment = self.comments.get(comment_id)
        if comment is None or comment.post_id != post_id:
            raise http_error(404, f"Comment not found: {comment_id}")
        return comment


def _list_response(kind: str, items: List[Dict[str, Any]]) -> Dict[str, Any]:
    response: Dict[str, Any] = {"kind": kind}
    if items:
        response["items"] = items
    return response


class MockRequest:
    """Deferred call; the work happens on ``execute()`` like the real client."""

    def __init__(self, fn: Callable[[], Any]):
        self._fn = fn

    def execute(self) -> Any:
        return self._fn()


class MockBlogsResource:
    def __init__(self, store: MockBloggerBackingStore):
        self._store = store

    def get(self, blogId: str, **kwargs) -> MockRequest:
        return MockRequest(lambda: self._store.get_blog(blogId).to_resource())

    def getByUrl(self, url: str, **kwargs) -> MockRequest:
        def run():
            for blog in self._store.blogs.values():
                if blog.url.rstrip("/") == url.rstrip("/"):
                    return blog.to_resource()
            raise http_error(404, f"Blog not found: {url}")

        return MockRequest(run)

    def listByUser(self, userId: str, **kwargs) -> MockRequest:
        def run():
            if userId not in (SELF_USER_ID, self._store.user.id):
                raise http_error(403, "Forbidden", reason="forbidden")
            blogs = [
                b.to_resource()
                for b in self._store.blogs.values()
                if b.owner_id == self._store.user.id
            ]
            return _list_response("blogger#blogList", blogs)

        return MockRequest(run)


class MockPostsResource:
    def __init__(self, store: MockBloggerBackingStore):
        self._store = store

    def _posts_for(self, blogId: str) -> List[MockPost]:
        self._store.get_blog(blogId)
        return [p for p in self._store.posts.values() if p.blog_id == blogId]

    def list(
        self,
        blogId: str,
        maxResults: Optional[int] = None,
        status: Optional[str] = None,
        labels: Optional[str] = None,
        **kwargs,
    ) -> MockRequest:
        def run():
            posts = self._posts_for(blogId)
            if status:
                posts = [p for p in posts if p.status.lower() == status.lower()]
            if labels:
                wanted = set(labels.split(","))
                posts = [p for p in posts if wanted & set(p.labels)]
            if maxResults is not None:
                posts = posts[: int(maxResults)]
            return _list_response(
                "blogger#postList", [p.to_resource() for p in posts]
            )

        return MockRequest(run)

    def search(self, blogId: str, q: str, **kwargs) -> MockRequest:
        def run():
            posts = [
                p
                for p in self._posts_for(blogId)
                if q.lower() in (p.title + " " + p.content).lower()
            ]
            return _list_response(
                "blogger#postList", [p.to_resource() for p in posts]
            )

        return MockRequest(run)

    def get(self, blogId: str, postId: str, **kwargs) -> MockRequest:
        return MockRequest(lambda: self._store.get_post(blogId, postId).to_resource())

    def insert(
        self, blogId: str, body: Dict[str, Any], isDraft: bool = False, **kwargs
    ) -> MockRequest:
        def run():
            self._store.get_blog(blogId)
            post = MockPost(blog_id=blogId, status="DRAFT" if isDraft else "LIVE")
            post.apply(body, replace=True)
            return self._store.add_post(post).to_resource()

        return MockRequest(run)

    def update(
        self, blogId: str, postId: str, body: Dict[str, Any], **kwargs
    ) -> MockRequest:
        def run():
            post = self._store.get_post(blogId, postId)
            post.apply(body, replace=True)
            return post.to_resource()

        return MockRequest(run)

    def patch(
        self, blogId: str, postId: str, body: Dict[str, Any], **kwargs
    ) -> MockRequest:
        def run():
            post = self._store.get_post(blogId, postId)
            post.apply(body, replace=False)
            return post.to_resource()

        return MockRequest(run)

    def delete(self, blogId: str, postId: str, **kwargs) -> MockRequest:
        def run():
            self._store.get_post(blogId, postId)
            del self._store.posts[postId]
            return {}

        return MockRequest(run)

    def publish(self, blogId: str, postId: str, **kwargs) -> MockRequest:
        def run():
            post = self._store.get_post(blogId, postId)
            post.status = "LIVE"
            return post.to_resource()

        return MockRequest(run)

    def revert(self, blogId: str, postId: str, **kwargs) -> MockRequest:
        def run():
            post = self._store.get_post(blogId, postId)
            post.status = "DRAFT"
            return post.to_resource()

        return MockRequest(run)


class MockCommentsResource:
    def __init__(self, store: MockBloggerBackingStore):
        self._store = store

    def list(
        self,
        blogId: str,
        postId: str,
        maxResults: Optional[int] = None,
        status: Optional[str] = None,
        **kwargs,
    ) -> MockRequest:
        def run():
            self._store.get_post(blogId, postId)
            comments = [
                c for c in self._store.comments.values() if c.post_id == postId
            ]
            if status:
                comments = [c for c in comments if c.status == status]
            if maxResults is not None:
                comments = comments[: int(maxResults)]
            return _list_response(
                "blogger#commentList", [c.to_resource() for c in comments]
            )

        return MockRequest(run)

    def get(self, blogId: str, postId: str, commentId: str, **kwargs) -> MockRequest:
        return MockRequest(
            lambda: self._store.get_comment(blogId, postId, commentId).to_resource()
        )

    def delete(
        self, blogId: str, postId: str, commentId: str, **kwargs
    ) -> MockRequest:
        def run():
            self._store.get_comment(blogId, postId, commentId)
            del self._store.comments[commentId]
            return {}

        return MockRequest(run)

    def _set_status(
        self, blogId: str, postId: str, commentId: str, status: str
    ) -> MockRequest:
        def run():
            comment = self._store.get_comment(blogId, postId, commentId)
            comment.status = status
            return comment.to_resource()

        return MockRequest(run)

    def approve(
        self, blogId: str, postId: str, commentId: str, **kwargs
    ) -> MockRequest:
        return self._set_status(blogId, postId, commentId, "live")

    def markAsSpam(
        self, blogId: str, postId: str, commentId: str, **kwargs
    ) -> MockRequest:
        return self._set_status(blogId, postId, commentId, "spam")


class MockPagesResource:
    def __init__(self, store: MockBloggerBackingStore):
        self._store = store

    def list(self, blogId: str, status: Optional[str] = None, **kwargs) -> MockRequest:
        def run():
            self._store.get_blog(blogId)
            pages = [p for p in self._store.pages.values() if p.blog_id == blogId]
            if status:
                pages = [p for p in pages if p.status.lower() == status.lower()]
            return _list_response(
                "blogger#pageList", [p.to_resource() for p in pages]
            )

        return MockRequest(run)

    def get(self, blogId: str, pageId: str, **kwargs) -> MockRequest:
        return MockRequest(lambda: self._store.get_page(blogId, pageId).to_resource())

    def insert(self, blogId: str, body: Dict[str, Any], **kwargs) -> MockRequest:
        def run():
            self._store.get_blog(blogId)
            page = MockPost(blog_id=blogId)
            page.apply(body, replace=True)
            return self._store.add_page(page).to_resource()

        return MockRequest(run)

    def update(
        self, blogId: str, pageId: str, body: Dict[str, Any], **kwargs
    ) -> MockRequest:
        def run():
            page = self._store.get_page(blogId, pageId)
            page.apply(body, replace=True)
            return page.to_resource()

        return MockRequest(run)

    def patch(
        self, blogId: str, pageId: str, body: Dict[str, Any], **kwargs
    ) -> MockRequest:
        def run():
            page = self._store.get_page(blogId, pageId)
            page.apply(body, replace=False)
            return page.to_resource()

        return MockRequest(run)

    def delete(self, blogId: str, pageId: str, **kwargs) -> MockRequest:
        def run():
            self._store.get_page(blogId, pageId)
            del self._store.pages[pageId]
            return {}

        return MockRequest(run)


class MockUsersResource:
    def __init__(self, store: MockBloggerBackingStore):
        self._store = store

    def get(self, userId: str, **kwargs) -> MockRequest:
        def run():
            if userId not in (SELF_USER_ID, self._store.user.id):
                raise http_error(404, f"User not found: {userId}")
            return self._store.user.to_resource()

        return MockRequest(run)


class MockBloggerService:
    """Mock Blogger v3 service.

    This is the main entry point that mimics the interface of the service
    object returned by googleapiclient.discovery.build().
    """

    def __init__(self, backing_store: Optional[MockBloggerBackingStore] = None):
        self.backing_store = backing_store or MockBloggerBackingStore()

    def blogs(self) -> MockBlogsResource:
        return MockBlogsResource(self.backing_store)

    def posts(self) -> MockPostsResource:
        return MockPostsResource(self.backing_store)

    def comments(self) -> MockCommentsResource:
        return MockCommentsResource(self.backing_store)

    def pages(self) -> MockPagesResource:
        return MockPagesResource(self.backing_store)

    def users(self) -> MockUsersResource:
        return MockUsersResource(self.backing_store)

    def builder(self) -> Callable[..., "MockBloggerService"]:
        """Service builder to hand to BloggerClient/RequestDispatcher."""
        return lambda credentials, timeout=None: self
