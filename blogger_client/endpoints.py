"""The closed set of Blogger API operations this client can call."""

from enum import Enum

from blogger_client.exceptions import MalformedEndpointError

ENDPOINT_SEPARATOR = "."


class Endpoint(str, Enum):
    """A Blogger v3 operation, named ``resource.action``.

    The value maps onto the discovery client as
    ``service.<resource>().<action>(**params)``.
    """

    BLOGS_GET = "blogs.get"
    BLOGS_GET_BY_URL = "blogs.getByUrl"
    BLOGS_LIST_BY_USER = "blogs.listByUser"
    POSTS_LIST = "posts.list"
    POSTS_GET = "posts.get"
    POSTS_SEARCH = "posts.search"
    POSTS_INSERT = "posts.insert"
    POSTS_DELETE = "posts.delete"
    POSTS_UPDATE = "posts.update"
    POSTS_PATCH = "posts.patch"
    POSTS_PUBLISH = "posts.publish"
    POSTS_REVERT = "posts.revert"
    COMMENTS_LIST = "comments.list"
    COMMENTS_GET = "comments.get"
    COMMENTS_DELETE = "comments.delete"
    COMMENTS_APPROVE = "comments.approve"
    COMMENTS_MARK_AS_SPAM = "comments.markAsSpam"
    PAGES_LIST = "pages.list"
    PAGES_GET = "pages.get"
    PAGES_INSERT = "pages.insert"
    PAGES_UPDATE = "pages.update"
    PAGES_PATCH = "pages.patch"
    PAGES_DELETE = "pages.delete"
    USERS_GET = "users.get"

    @property
    def resource(self) -> str:
        return self.value.split(ENDPOINT_SEPARATOR)[0]

    @property
    def action(self) -> str:
        return self.value.split(ENDPOINT_SEPARATOR)[1]

    @property
    def http_method(self) -> str:
        return HTTP_METHODS[self.action]

    @classmethod
    def parse(cls, endpoint: "str | Endpoint") -> "Endpoint":
        """Resolve a ``resource.action`` string into a known endpoint."""
        if isinstance(endpoint, cls):
            return endpoint
        if not isinstance(endpoint, str):
            raise MalformedEndpointError(repr(endpoint), "expected a string")

        parts = endpoint.split(ENDPOINT_SEPARATOR)
        if len(parts) != 2 or not all(parts):
            raise MalformedEndpointError(
                endpoint, "expected exactly one '.' between resource and action"
            )
        try:
            return cls(endpoint)
        except ValueError:
            raise MalformedEndpointError(endpoint, "unknown operation") from None


HTTP_METHODS = {
    "get": "GET",
    "getByUrl": "GET",
    "list": "GET",
    "listByUser": "GET",
    "search": "GET",
    "insert": "POST",
    "publish": "POST",
    "revert": "POST",
    "approve": "POST",
    "markAsSpam": "POST",
    "update": "PUT",
    "patch": "PATCH",
    "delete": "DELETE",
}
