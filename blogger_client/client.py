"""Convenience wrappers over the Blogger v3 API."""

import logging
from typing import Any, Dict, Optional

from blogger_client.dispatcher import RequestDispatcher, ServiceBuilder
from blogger_client.endpoints import Endpoint
from blogger_client.exceptions import NotFoundError
from blogger_client.session import Session
from blogger_client.validation import extract_domain, require_params

logger = logging.getLogger(__name__)

SELF_USER_ID = "self"


class BloggerClient:
    """Blogger API client bound to one session and, optionally, one blog.

    Example:
        session = Session(credentials_path="credentials.json")
        client = BloggerClient(session, blog_id="1234567890")
        posts = client.get_posts(maxResults=5)
    """

    def __init__(
        self,
        session: Optional[Session] = None,
        blog_id: Optional[str] = None,
        service_builder: Optional[ServiceBuilder] = None,
    ):
        self.session = session or Session()
        self.blog_id = blog_id
        self.dispatcher = RequestDispatcher(self.session, service_builder)

    def __repr__(self) -> str:
        return f"BloggerClient(blog_id={self.blog_id!r}, session={self.session!r})"

    def send_request(
        self,
        method: str,
        endpoint: "str | Endpoint",
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Generic escape hatch: call any ``resource.action`` endpoint."""
        return self.dispatcher.dispatch(method, endpoint, params)

    def _blog_params(self, **params) -> Dict[str, Any]:
        require_params(["blogId"], {"blogId": self.blog_id})
        return {"blogId": self.blog_id, **params}

    # Blogs

    def get_blog(self) -> Dict[str, Any]:
        return self.send_request("GET", Endpoint.BLOGS_GET, self._blog_params())

    def get_blog_by_url(self, blog_url: str) -> Dict[str, Any]:
        """Find one of the authenticated user's blogs by its hostname.

        Hostnames compare case-insensitively with a leading ``www.`` ignored.

        Raises:
            NotFoundError: If no owned blog matches.
        """
        require_params(["blogUrl"], {"blogUrl": blog_url})
        domain = extract_domain(blog_url)
        if not domain:
            raise NotFoundError(f"Blog not found: {blog_url}")
        blogs = self.get_user_blogs(SELF_USER_ID)
        for blog in blogs.get("items", []):
            # blogs whose url has no hostname never match
            if extract_domain(blog.get("url") or "") == domain:
                return blog
        raise NotFoundError(f"Blog not found: {blog_url}")

    def get_user_blogs(self, user_id: str) -> Dict[str, Any]:
        require_params(["userId"], {"userId": user_id})
        return self.send_request(
            "GET", Endpoint.BLOGS_LIST_BY_USER, {"userId": user_id}
        )

    # Posts

    def get_posts(self, **params) -> Dict[str, Any]:
        return self.send_request(
            "GET", Endpoint.POSTS_LIST, self._blog_params(**params)
        )

    def get_post(self, post_id: str) -> Dict[str, Any]:
        require_params(["postId"], {"postId": post_id})
        return self.send_request(
            "GET", Endpoint.POSTS_GET, self._blog_params(postId=post_id)
        )

    def add_post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        require_params(["body"], {"body": body})
        return self.send_request(
            "POST", Endpoint.POSTS_INSERT, self._blog_params(body=body)
        )

    def delete_post(self, post_id: str) -> Any:
        require_params(["postId"], {"postId": post_id})
        return self.send_request(
            "DELETE", Endpoint.POSTS_DELETE, self._blog_params(postId=post_id)
        )

    def update_post(self, post_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Replace a post entirely."""
        require_params(["postId"], {"postId": post_id})
        return self.send_request(
            "PUT",
            Endpoint.POSTS_UPDATE,
            self._blog_params(postId=post_id, body=body),
        )

    def patch_post(self, post_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Update only the fields present in ``body``."""
        require_params(["postId"], {"postId": post_id})
        return self.send_request(
            "PATCH",
            Endpoint.POSTS_PATCH,
            self._blog_params(postId=post_id, body=body),
        )

    # Comments

    def get_comments(self, post_id: str, **params) -> Dict[str, Any]:
        require_params(["postId"], {"postId": post_id})
        return self.send_request(
            "GET",
            Endpoint.COMMENTS_LIST,
            self._blog_params(postId=post_id, **params),
        )

    def get_comment(self, post_id: str, comment_id: str) -> Dict[str, Any]:
        params = {"postId": post_id, "commentId": comment_id}
        require_params(["postId", "commentId"], params)
        return self.send_request(
            "GET", Endpoint.COMMENTS_GET, self._blog_params(**params)
        )

    def delete_comment(self, post_id: str, comment_id: str) -> Any:
        params = {"postId": post_id, "commentId": comment_id}
        require_params(["postId", "commentId"], params)
        return self.send_request(
            "DELETE", Endpoint.COMMENTS_DELETE, self._blog_params(**params)
        )

    def approve_comment(self, post_id: str, comment_id: str) -> Dict[str, Any]:
        params = {"postId": post_id, "commentId": comment_id}
        require_params(["postId", "commentId"], params)
        return self.send_request(
            "POST", Endpoint.COMMENTS_APPROVE, self._blog_params(**params)
        )

    # Pages

    def get_pages(self, **params) -> Dict[str, Any]:
        return self.send_request(
            "GET", Endpoint.PAGES_LIST, self._blog_params(**params)
        )

    def get_page(self, page_id: str) -> Dict[str, Any]:
        require_params(["pageId"], {"pageId": page_id})
        return self.send_request(
            "GET", Endpoint.PAGES_GET, self._blog_params(pageId=page_id)
        )

    def add_page(self, body: Dict[str, Any]) -> Dict[str, Any]:
        require_params(["body"], {"body": body})
        return self.send_request(
            "POST", Endpoint.PAGES_INSERT, self._blog_params(body=body)
        )

    def update_page(self, page_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        require_params(["pageId"], {"pageId": page_id})
        return self.send_request(
            "PUT",
            Endpoint.PAGES_UPDATE,
            self._blog_params(pageId=page_id, body=body),
        )

    def delete_page(self, page_id: str) -> Any:
        require_params(["pageId"], {"pageId": page_id})
        return self.send_request(
            "DELETE", Endpoint.PAGES_DELETE, self._blog_params(pageId=page_id)
        )

    # Users

    def get_user(self) -> Dict[str, Any]:
        return self.send_request("GET", Endpoint.USERS_GET, {"userId": SELF_USER_ID})

    def logout(self) -> bool:
        """Delete the stored credential. Never raises."""
        return self.session.revoke()
