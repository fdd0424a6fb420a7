from .stub_server import StubServer, StubError, Hit
