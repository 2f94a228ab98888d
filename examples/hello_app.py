"""
LiteSpring example: two controllers, a shared service, and a failing component.

    python examples/hello_app.py
"""

from litespring import (
    Autowired,
    Component,
    InvocationError,
    LiteSpring,
    LoggerBinding,
    Request,
    RequestMapping,
    Response,
)


@Component
class GreetingService:
    def __init__(self):
        self.counter = 0

    def greet(self, name: str) -> str:
        self.counter += 1
        return f"Hello {name}! (called {self.counter} times)"


@Component
class MetricsClient:
    def __init__(self):
        raise ConnectionError("metrics backend unavailable")


@Component
@LoggerBinding()
class GreetingController:
    greetings: GreetingService = Autowired()
    metrics: MetricsClient = Autowired()

    def __init__(self, logger=None):
        self.logger = logger

    @RequestMapping("/hello")
    def hello(self, request: Request) -> Response:
        if self.metrics is None:
            self.logger.debug("Metrics disabled")
        return Response(200, {"message": self.greetings.greet("World")})


@Component
class StatusController:
    greetings: GreetingService = Autowired()

    @RequestMapping("/status")
    def status(self, request: Request) -> Response:
        return Response(200, {"status": "running", "greetings": self.greetings.counter})

    @RequestMapping("/crash")
    def crash(self, request: Request) -> Response:
        raise RuntimeError("status store corrupted")


if __name__ == "__main__":
    app = LiteSpring(GreetingController, StatusController, GreetingService, MetricsClient)

    print("=== LiteSpring Example ===")
    print("Components:", app.list_components())
    print("Routes:", app.list_routes())
    print("Failures:", [str(failure) for failure in app.report.failures])
    print("Gaps:", [str(gap) for gap in app.report.gaps])

    for path in ("/hello", "/hello", "/status", "/missing"):
        response = app.handle_request(Request("GET", path))
        print(path, "->", None if response is None else dict(response.body))

    try:
        app.handle_request(Request("GET", "/crash"))
    except InvocationError as exc:
        print("/crash ->", exc, "caused by", repr(exc.__cause__))
