import pytest

from litespring.config.settings import ContainerSettings, Settings
from litespring.litespring import LiteSpring
from litespring.shared.annotations import Autowired, Component, RequestMapping
from litespring.shared.dispatcher import FixedTargetPolicy
from litespring.shared.errors import InstantiationError, InvocationError
from litespring.shared.http import Request, Response
from litespring.shared.metadata import ComponentDescriptor, HandlerDescriptor, InjectableFieldDescriptor


# -----------------------------
# Test components
# -----------------------------
@Component
class Service:
    def do_something(self):
        return "done"


@Component
class Controller:
    service: Service = Autowired()

    def __init__(self):
        self.seen_service = []

    @RequestMapping("/hello")
    def hello(self, request):
        self.seen_service.append(self.service)
        return Response(200, {"message": "Hello, World!", "work": self.service.do_something()})

    @RequestMapping("/fail")
    def fail(self, request):
        raise RuntimeError("broken handler")


@Component
class Exploding:
    def __init__(self):
        raise RuntimeError("constructor failed")


@Component
class NeedsArguments:
    def __init__(self, value):
        self.value = value


@Component
class DependsOnExploding:
    exploding: Exploding = Autowired()
    service: Service = Autowired()


class NotAComponent:
    pass


@Component
class First:
    second: "Second" = Autowired()


@Component
class Second:
    first: First = Autowired()


# -----------------------------
# Bootstrap
# -----------------------------
def test_bootstrap_registers_every_component(fake_logger):
    app = LiteSpring(Controller, Service, logger=fake_logger)

    assert isinstance(app.get(Controller), Controller)
    assert isinstance(app.get(Service), Service)
    assert app.get(NotAComponent) is None
    assert app.report.ok
    assert set(app.list_components()) == {"Controller", "Service"}


def test_bootstrap_wires_same_singleton(fake_logger):
    app = LiteSpring(Controller, Service, logger=fake_logger)

    assert app.get(Controller).service is app.get(Service)


def test_bootstrap_order_does_not_matter_for_wiring(fake_logger):
    app = LiteSpring(Service, Controller, logger=fake_logger)

    assert app.get(Controller).service is app.get(Service)


def test_bootstrap_resolves_circular_dependencies(fake_logger):
    app = LiteSpring(First, Second, logger=fake_logger)

    assert app.get(First).second is app.get(Second)
    assert app.get(Second).first is app.get(First)


def test_failing_constructor_is_contained(fake_logger):
    app = LiteSpring(Exploding, NeedsArguments, Controller, Service, logger=fake_logger)

    assert app.get(Exploding) is None
    assert app.get(NeedsArguments) is None
    assert app.get(Controller).service is app.get(Service)
    assert not app.report.ok
    assert [f.component_type for f in app.report.failures] == [Exploding, NeedsArguments]
    assert all(isinstance(f, InstantiationError) for f in app.report.failures)
    assert isinstance(app.report.failures[0].__cause__, RuntimeError)
    assert isinstance(app.report.failures[1].__cause__, TypeError)
    assert fake_logger.error.call_count == 2


def test_missing_dependency_is_a_reported_gap(fake_logger):
    app = LiteSpring(Exploding, DependsOnExploding, Service, logger=fake_logger)

    instance = app.get(DependsOnExploding)
    assert instance.exploding is None
    assert instance.service is app.get(Service)
    assert [gap.dependency_type for gap in app.report.gaps] == [Exploding]
    fake_logger.warning.assert_called()


def test_gap_warning_can_be_downgraded(fake_logger):
    settings = Settings(container=ContainerSettings(warn_on_wiring_gaps=False))
    app = LiteSpring(DependsOnExploding, logger=fake_logger, settings=settings)

    assert len(app.report.gaps) == 2
    fake_logger.warning.assert_not_called()


def test_non_components_are_skipped(fake_logger):
    app = LiteSpring(NotAComponent, Service, logger=fake_logger)

    assert app.get(NotAComponent) is None
    assert app.report.skipped == [NotAComponent]


def test_explicit_descriptors_need_no_decorators(fake_logger):
    class Store:
        pass

    class Api:
        def __init__(self):
            self.store = None

        def status(self, request):
            return Response(200, {"has_store": self.store is not None})

    app = LiteSpring(
        ComponentDescriptor(type=Store),
        ComponentDescriptor(
            type=Api,
            fields=(InjectableFieldDescriptor("store", Store),),
            handlers=(HandlerDescriptor("status", "/status"),),
        ),
        logger=fake_logger,
    )

    assert app.get(Api).store is app.get(Store)
    assert app.handle_request(Request("GET", "/status")).body == {"has_store": True}


def test_descriptor_factory_is_used(fake_logger):
    built = Service()
    app = LiteSpring(ComponentDescriptor(type=Service, factory=lambda: built), logger=fake_logger)

    assert app.get(Service) is built


# -----------------------------
# Dispatch
# -----------------------------
def test_hello_request_invokes_handler_with_wired_service(fake_logger):
    app = LiteSpring(Controller, Service, logger=fake_logger)

    response = app.handle_request(Request("GET", "/hello"))

    assert response.status_code == 200
    assert response.body == {"message": "Hello, World!", "work": "done"}
    assert app.get(Controller).seen_service == [app.get(Service)]


def test_missing_path_returns_none(fake_logger):
    app = LiteSpring(Controller, Service, logger=fake_logger)

    assert app.handle_request(Request("GET", "/missing")) is None


def test_repeated_dispatch_is_deterministic(fake_logger):
    app = LiteSpring(Controller, Service, logger=fake_logger)

    responses = [app.handle_request(Request("GET", "/hello")) for _ in range(3)]
    assert responses[0] == responses[1] == responses[2]


def test_handler_failure_propagates_and_app_survives(fake_logger):
    app = LiteSpring(Controller, Service, logger=fake_logger)

    with pytest.raises(InvocationError) as excinfo:
        app.handle_request(Request("GET", "/fail"))
    assert isinstance(excinfo.value.__cause__, RuntimeError)

    assert app.handle_request(Request("GET", "/hello")).status_code == 200


def test_fixed_target_policy(fake_logger):
    app = LiteSpring(Controller, Service, logger=fake_logger, policy=FixedTargetPolicy(Controller))

    assert app.handle_request(Request("GET", "/hello")).status_code == 200
    assert app.handle_request(Request("GET", "/missing")) is None
    assert app.list_routes() == []


def test_list_routes(fake_logger):
    app = LiteSpring(Controller, Service, logger=fake_logger)

    assert app.list_routes() == ["/hello -> Controller.hello", "/fail -> Controller.fail"]


def test_default_logger_is_built_from_settings(clean_logger_cache):
    app = LiteSpring(Service)

    assert app.logger.name == "LiteSpring"
    assert isinstance(app.get(Service), Service)
