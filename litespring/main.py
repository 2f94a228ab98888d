# litespring/main.py
from litespring.config.logger import get_logger
from litespring.litespring import LiteSpring
from litespring.shared.annotations import Autowired, Component, LoggerBinding, RequestMapping
from litespring.shared.http import Request, Response


@Component
@LoggerBinding()
class MyService:
    def __init__(self, logger=None):
        self.logger = logger

    def do_something(self) -> str:
        self.logger.info("MyService doing something...")
        return "done"


@Component
@LoggerBinding()
class MyController:
    my_service: MyService = Autowired()

    def __init__(self, logger=None):
        self.logger = logger

    @RequestMapping("/hello")
    def hello(self, request: Request) -> Response:
        self.logger.info(f"Handling request for path: {request.path}")
        self.my_service.do_something()
        return Response(200, {"message": "Hello, World!"})


def main() -> None:
    logger = get_logger("litespring.main")
    app = LiteSpring(MyController, MyService)
    logger.info(f"Routes: {app.list_routes()}")

    response = app.handle_request(Request("GET", "/hello"))
    if response is None:
        logger.warning("No handler for /hello")
        return
    logger.info(f"Response: {dict(response.body)}", status=response.status_code)


if __name__ == "__main__":
    main()
