import asyncio

import pytest
from flask import Flask
from pydantic import BaseModel

from backend.common.base.base_controller import BaseController, async_route_handler
from backend.common.errors import DomainError, Forbidden, Unauthenticated, ValidationFailed
from backend.common.rest.request_context import CallerIdentity, RequestContext
from backend.common.rest.response import format_response
from backend.common.rest.result import Err, Ok
from backend.common.rest.routing import ResourceController, RouteBinding, build_route_table, register_controller
from backend.features.employees.dto.employee_request import CreateEmployeeRequest
from backend.features.system.controller.health_controller import HealthController
from backend.features.system.service.health_service import HealthService
from backend.services.system.auth_middleware import authorize
from backend.services.system.error_handlers import register_error_handlers
from backend.services.system.validation_middleware import validate


class Shape(BaseModel):
    name: str
    age: int


# --- envelope -------------------------------------------------------------

def test_format_response_has_exactly_three_fields():
    envelope = format_response({'a': 1}, 12.7, 'OK')
    assert envelope == {'data': {'a': 1}, 'elapsedMs': 12, 'status': 'OK'}


def test_format_response_passes_none_through_and_clamps_negative():
    envelope = format_response(None, -5, 'OK')
    assert envelope['data'] is None
    assert envelope['elapsedMs'] == 0


# --- adapter --------------------------------------------------------------

def test_adapter_turns_raise_into_err():
    error = DomainError('boom')

    async def handler(ctx):
        raise error

    result = asyncio.run(async_route_handler(handler)(RequestContext()))

    assert isinstance(result, Err)
    assert result.error is error


def test_adapter_passes_existing_err_through_once():
    error = DomainError('handled locally')
    calls = []

    async def handler(ctx):
        calls.append(ctx)
        return Err(error)

    result = asyncio.run(async_route_handler(handler)(RequestContext()))

    assert result == Err(error)
    assert len(calls) == 1


def test_adapter_accepts_sync_handlers_and_rejects_bare_values():
    ok = asyncio.run(async_route_handler(lambda ctx: Ok({'x': 1}))(RequestContext()))
    bad = asyncio.run(async_route_handler(lambda ctx: {'x': 1})(RequestContext()))

    assert ok == Ok({'x': 1})
    assert isinstance(bad, Err) and isinstance(bad.error, TypeError)


# --- authorization --------------------------------------------------------

def test_authorize_without_caller_is_unauthenticated():
    with pytest.raises(Unauthenticated):
        asyncio.run(authorize(['admin'])(RequestContext()))


def test_authorize_without_matching_role_is_forbidden():
    ctx = RequestContext(caller=CallerIdentity('u1', frozenset({'guest'})))
    with pytest.raises(Forbidden):
        asyncio.run(authorize(['admin', 'Engineer'])(ctx))


def test_authorize_with_any_matching_role_passes_unchanged():
    ctx = RequestContext(caller=CallerIdentity('u1', frozenset({'guest', 'Engineer'})), body={'k': 'v'})
    asyncio.run(authorize(['admin', 'Engineer'])(ctx))
    assert ctx.body == {'k': 'v'}


# --- validation -----------------------------------------------------------

def test_validate_replaces_body_with_coerced_model():
    ctx = RequestContext(body={'name': 'x', 'age': '41'})
    asyncio.run(validate(Shape)(ctx))
    assert ctx.body == Shape(name='x', age=41)


def test_validate_reports_each_violation():
    ctx = RequestContext(body={'age': 'old'})
    with pytest.raises(ValidationFailed) as exc_info:
        asyncio.run(validate(Shape)(ctx))
    fields = {v['field'] for v in exc_info.value.violations}
    assert fields == {'name', 'age'}


def test_validate_treats_missing_body_as_empty_object():
    with pytest.raises(ValidationFailed):
        asyncio.run(validate(Shape)(RequestContext(body=None)))


# --- route table & controllers --------------------------------------------

async def _noop(ctx):
    return Ok(None)


def test_duplicate_bindings_are_rejected():
    bindings = [
        RouteBinding('GET', '/x', (), _noop, endpoint='a'),
        RouteBinding('get', '/x', (), _noop, endpoint='b'),
    ]
    with pytest.raises(ValueError):
        build_route_table(bindings)


class WidgetController(BaseController):
    def __init__(self, duplicate=False):
        self.duplicate = duplicate
        self.seen = []
        super().__init__('/api/widgets/')

    def initialize_routes(self):
        self.add_route('GET', '', handler=self.async_route_handler(self.list_widgets))
        self.add_route('GET', '/<widget_id>', self.record, handler=self.async_route_handler(self.get_widget))
        self.add_route('POST', '/fail', handler=self.async_route_handler(self.fail))
        if self.duplicate:
            self.add_route('GET', '', handler=self.async_route_handler(self.list_widgets))

    async def record(self, ctx):
        self.seen.append('middleware')

    async def list_widgets(self, ctx):
        return self.ok(ctx, ['w1'])

    async def get_widget(self, ctx):
        self.seen.append('handler')
        return self.ok(ctx, {'id': ctx.params['widget_id']}, status_code=202)

    async def fail(self, ctx):
        raise DomainError('widget failure')


def test_base_controller_freezes_routes_in_order():
    controller = WidgetController()

    assert controller.path == '/api/widgets'
    assert isinstance(controller.routes, tuple)
    assert [(b.method, b.path) for b in controller.routes] == [
        ('GET', ''), ('GET', '/<widget_id>'), ('POST', '/fail'),
    ]
    assert isinstance(controller, ResourceController)


def test_base_controller_rejects_duplicate_routes():
    with pytest.raises(ValueError):
        WidgetController(duplicate=True)


def test_health_controller_satisfies_protocol_without_inheritance():
    controller = HealthController(HealthService(), api_prefix='/api')
    assert not isinstance(controller, BaseController)
    assert isinstance(controller, ResourceController)


@pytest.fixture
def widget_client():
    app = Flask(__name__)
    register_error_handlers(app)
    controller = WidgetController()
    register_controller(app, controller)
    return app.test_client(), controller


def test_router_runs_middleware_before_handler_and_writes_envelope(widget_client):
    client, controller = widget_client

    response = client.get('/api/widgets/42')

    assert response.status_code == 202
    assert response.get_json()['data'] == {'id': '42'}
    assert controller.seen == ['middleware', 'handler']


def test_router_forwards_errors_to_error_handlers(widget_client):
    client, _ = widget_client

    response = client.post('/api/widgets/fail')

    assert response.status_code == 400
    assert response.get_json() == {'success': False, 'error': 'widget failure', 'code': 'DOMAIN_ERROR'}


def test_concurrent_handler_invocations_keep_their_own_context(app):
    controller = app.extensions['employee_controller']
    get_binding = next(
        b for b in controller.routes if b.method == 'GET' and b.path == '/<employee_id>'
    )

    async def scenario():
        created = [
            await controller.employee_service.create_employee(CreateEmployeeRequest(
                name=f'E{i}', username=f'user{i}', password='secret-pass', role='Engineer'))
            for i in range(10)
        ]
        contexts = [RequestContext(params={'employee_id': e['id']}) for e in created]
        results = await asyncio.gather(*(get_binding.handler(ctx) for ctx in contexts))
        return created, results

    created, results = asyncio.run(scenario())
    for employee, result in zip(created, results):
        assert isinstance(result, Ok)
        assert result.value['data']['id'] == employee['id']


def test_ok_carries_status_label_only_in_envelope():
    controller = WidgetController()

    result = controller.ok(RequestContext(), {'id': 'w1'}, status_code=201, status='CREATED')

    assert result.status_code == 201
    assert result.value['status'] == 'CREATED'
    assert set(vars(result)) == {'value', 'status_code'}
