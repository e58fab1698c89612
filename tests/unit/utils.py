from unittest.mock import Mock

CLIENT_ID = "test-client-id.apps.googleusercontent.com"
CLIENT_SECRET = "test-client-secret"
REFRESH_TOKEN = "test-refresh-token"


def make_flow_mock(refresh_token=REFRESH_TOKEN):
    """InstalledAppFlow stand-in whose local-server flow yields credentials."""
    credentials = Mock()
    credentials.refresh_token = refresh_token
    flow = Mock()
    flow.run_local_server.return_value = credentials
    flow.credentials = credentials
    flow.authorization_url.return_value = ("https://accounts.example/auth", "state")
    return flow
