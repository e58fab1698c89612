"""
Unit tests for RequestDispatcher
"""

import logging
from unittest.mock import Mock, patch

import httplib2
import pytest

from blogger_client.dispatcher import RequestDispatcher, build_blogger_service
from blogger_client.endpoints import Endpoint
from blogger_client.exceptions import (
    AuthFlowError,
    MalformedEndpointError,
    RequestError,
)
from blogger_client.mock_blogger_service import http_error


def stub_builder(service):
    builder = Mock(return_value=service)
    return builder


@pytest.fixture
def fake_session():
    session = Mock()
    session.timeout = 30
    session.ensure_authenticated.return_value = Mock(name="credentials")
    return session


class TestDispatch:
    def test_returns_payload_unmodified(self, fake_session):
        payload = {"id": "P", "title": "T"}
        service = Mock()
        service.posts().get().execute.return_value = payload
        dispatcher = RequestDispatcher(fake_session, stub_builder(service))

        result = dispatcher.dispatch("GET", "posts.get", {"blogId": "B", "postId": "P"})

        assert result is payload
        assert result == {"id": "P", "title": "T"}
        service.posts().get.assert_called_with(blogId="B", postId="P")

    def test_accepts_endpoint_member(self, fake_session):
        service = Mock()
        service.pages().list().execute.return_value = {"items": []}
        dispatcher = RequestDispatcher(fake_session, stub_builder(service))

        assert dispatcher.dispatch("GET", Endpoint.PAGES_LIST, {"blogId": "B"}) == {
            "items": []
        }

    def test_builder_gets_credentials_and_timeout(self, fake_session):
        builder = stub_builder(Mock())
        dispatcher = RequestDispatcher(fake_session, builder)

        dispatcher.dispatch("GET", "users.get", {"userId": "self"})

        builder.assert_called_once_with(
            fake_session.ensure_authenticated.return_value, 30
        )

    def test_authenticates_on_every_call(self, fake_session):
        dispatcher = RequestDispatcher(fake_session, stub_builder(Mock()))
        dispatcher.dispatch("GET", "users.get", {"userId": "self"})
        dispatcher.dispatch("GET", "users.get", {"userId": "self"})
        assert fake_session.ensure_authenticated.call_count == 2

    def test_params_not_mutated(self, fake_session):
        params = {"blogId": "B"}
        dispatcher = RequestDispatcher(fake_session, stub_builder(Mock()))
        dispatcher.dispatch("GET", "posts.list", params)
        assert params == {"blogId": "B"}

    def test_warns_on_method_mismatch(self, fake_session, caplog):
        dispatcher = RequestDispatcher(fake_session, stub_builder(Mock()))
        with caplog.at_level(logging.WARNING, logger="blogger_client.dispatcher"):
            dispatcher.dispatch("post", "posts.get", {"blogId": "B", "postId": "P"})
        assert "POST does not match posts.get (GET)" in caplog.text

    def test_matching_method_does_not_warn(self, fake_session, caplog):
        dispatcher = RequestDispatcher(fake_session, stub_builder(Mock()))
        with caplog.at_level(logging.WARNING, logger="blogger_client.dispatcher"):
            dispatcher.dispatch("delete", "posts.delete", {"blogId": "B", "postId": "P"})
        assert caplog.text == ""


class TestDispatchErrors:
    def test_network_fault_wrapped(self, fake_session):
        service = Mock()
        service.posts().get().execute.side_effect = httplib2.ServerNotFoundError(
            "Unable to find the server at blogger.googleapis.com"
        )
        dispatcher = RequestDispatcher(fake_session, stub_builder(service))

        with pytest.raises(RequestError) as exc_info:
            dispatcher.dispatch("GET", "posts.get", {"blogId": "B", "postId": "P"})

        message = str(exc_info.value)
        assert "GET" in message
        assert "posts.get" in message
        assert "Unable to find the server" in message
        assert isinstance(exc_info.value.cause, httplib2.ServerNotFoundError)
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_http_error_wrapped(self, fake_session):
        service = Mock()
        service.posts().delete().execute.side_effect = http_error(404, "gone")
        dispatcher = RequestDispatcher(fake_session, stub_builder(service))

        with pytest.raises(RequestError) as exc_info:
            dispatcher.dispatch("delete", "posts.delete", {"blogId": "B", "postId": "P"})

        assert exc_info.value.method == "DELETE"
        assert exc_info.value.endpoint == "posts.delete"
        assert str(exc_info.value).startswith(
            "Error making DELETE request to posts.delete:"
        )

    def test_builder_failure_wrapped(self, fake_session):
        builder = Mock(side_effect=RuntimeError("discovery failed"))
        dispatcher = RequestDispatcher(fake_session, builder)

        with pytest.raises(RequestError, match="discovery failed"):
            dispatcher.dispatch("GET", "blogs.get", {"blogId": "B"})

    def test_malformed_endpoint_fails_before_auth(self, fake_session):
        dispatcher = RequestDispatcher(fake_session, stub_builder(Mock()))

        with pytest.raises(MalformedEndpointError):
            dispatcher.dispatch("GET", "posts.get.extra", {})

        fake_session.ensure_authenticated.assert_not_called()

    def test_auth_error_not_wrapped(self, fake_session):
        fake_session.ensure_authenticated.side_effect = AuthFlowError("denied")
        dispatcher = RequestDispatcher(fake_session, stub_builder(Mock()))

        with pytest.raises(AuthFlowError, match="denied"):
            dispatcher.dispatch("GET", "users.get", {"userId": "self"})


class TestBuildBloggerService:
    @patch("blogger_client.dispatcher.build")
    @patch("blogger_client.dispatcher.AuthorizedHttp")
    def test_builds_v3_with_authorized_http(self, mock_authorized_http, mock_build):
        credentials = Mock()

        service = build_blogger_service(credentials, timeout=15)

        assert service is mock_build.return_value
        authorized_args = mock_authorized_http.call_args
        assert authorized_args.args[0] is credentials
        assert authorized_args.kwargs["http"].timeout == 15
        mock_build.assert_called_once_with(
            "blogger",
            "v3",
            http=mock_authorized_http.return_value,
            cache_discovery=False,
        )
