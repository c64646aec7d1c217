"""Tests for the TestRun state machine."""
import pytest

from conftest import FakeDriver, RecordingListener
from interpreter.exceptions import (
    InterpreterError, MissingParameterError, SessionError, UnresolvedStepTypeError
)
from interpreter.test_run import RunState


@pytest.mark.asyncio
async def test_zero_steps_succeeds(make_run, fake_driver):
    run = make_run([], driver=fake_driver)
    result = await run.run()
    assert result.success is True
    assert run.state is RunState.ENDED
    assert fake_driver.quit_count == 1


@pytest.mark.asyncio
async def test_assert_then_click_end_to_end(make_run):
    driver = FakeDriver(page_text='Welcome back, Ada', elements={'go': {'text': 'Go'}})
    listener = RecordingListener()
    run = make_run([
        {'type': 'assertTextPresent', 'text': 'Welcome'},
        {'type': 'click', 'locator': {'type': 'id', 'value': 'go'}},
    ], driver=driver, listener=listener)

    result = await run.run()

    assert result.success is True
    assert ('click_element', 'go') in driver.calls
    assert listener.events == [
        ('start_test_run', 'inline', True),
        ('start_step', 'assertTextPresent'),
        ('end_step', 'assertTextPresent', True),
        ('start_step', 'click'),
        ('end_step', 'click', True),
        ('end_test_run', 'inline', True),
    ]


@pytest.mark.asyncio
async def test_unresolved_step_type_fails_run_without_raising(make_run, fake_driver):
    run = make_run([{'type': 'teleport'}, {'type': 'refresh'}], driver=fake_driver)
    steps = []
    result = await run.run(step_callback=steps.append)
    assert result.success is False
    assert isinstance(result.error, UnresolvedStepTypeError)
    assert 'Unable to load step type teleport.' in str(result.error)
    assert len(steps) == 1
    assert fake_driver.quit_count == 1


@pytest.mark.asyncio
async def test_missing_parameter_fails_step(make_run):
    run = make_run([{'type': 'get'}])
    result = await run.run()
    assert isinstance(result.error, MissingParameterError)
    assert 'Missing parameter "url" in step #1.' in str(result.error)


@pytest.mark.asyncio
async def test_driver_error_becomes_step_failure(make_run):
    run = make_run([{'type': 'click', 'locator': {'type': 'id', 'value': 'absent'}}])
    result = await run.run()
    assert result.success is False
    assert isinstance(result.error, SessionError)


@pytest.mark.asyncio
async def test_start_failure(make_run):
    listener = RecordingListener()
    run = make_run([{'type': 'refresh'}], driver=FakeDriver(fail_init=True), listener=listener)
    result = await run.run()
    assert result.success is False
    assert 'Unable to start playback session.' in str(result.error)
    assert isinstance(result.error.__cause__, SessionError)
    assert run.state is RunState.NOT_STARTED
    assert listener.events == [('start_test_run', 'inline', False)]


@pytest.mark.asyncio
async def test_teardown_error_is_attached_behind_primary_error(make_run):
    driver = FakeDriver(fail_quit=True)
    run = make_run([{'type': 'teleport'}], driver=driver)
    result = await run.run()
    assert isinstance(result.error, UnresolvedStepTypeError)
    assert isinstance(result.additional_error, SessionError)
    assert 'quit failed' in str(result.additional_error)


@pytest.mark.asyncio
async def test_teardown_error_alone_fails_run(make_run):
    run = make_run([{'type': 'refresh'}], driver=FakeDriver(fail_quit=True))
    result = await run.run()
    assert result.success is False
    assert 'quit failed' in str(result.error)
    assert result.additional_error is None


@pytest.mark.asyncio
async def test_success_never_recovers(make_run):
    run = make_run([
        {'type': 'verifyTextPresent', 'text': 'absent'},
        {'type': 'refresh'},
    ])
    await run.start()
    first = await run.next()
    second = await run.next()
    assert first.success is False and second.success is True
    assert run.success is False


@pytest.mark.asyncio
async def test_next_past_end_raises_and_keeps_index(make_run):
    run = make_run([{'type': 'refresh'}])
    await run.start()
    await run.next()
    assert not run.has_next()
    with pytest.raises(InterpreterError):
        await run.next()
    assert run.step_index == 0


@pytest.mark.asyncio
async def test_end_without_start_reports_no_session(make_run):
    run = make_run([])
    result = await run.end()
    assert result.success is False
    assert 'No session running.' in str(result.error)


@pytest.mark.asyncio
async def test_script_timeout_sets_implicit_wait_and_wait_budget(make_run, fake_driver):
    run = make_run([], driver=fake_driver, timeout_seconds=7)
    assert run.wait_timeout == 7
    await run.start()
    assert fake_driver.implicit_wait == 7


@pytest.mark.asyncio
async def test_listener_exception_still_ends_run(make_run, fake_driver):
    class Exploding(RecordingListener):
        def end_step(self, test_run, step, result):
            raise RuntimeError('listener bug')

    run = make_run([{'type': 'refresh'}], driver=fake_driver, listener=Exploding())
    result = await run.run()
    assert result.success is False
    assert 'listener bug' in str(result.error)
    assert fake_driver.quit_count == 1


@pytest.mark.asyncio
async def test_reset_restores_initial_state(make_run, fake_driver):
    run = make_run([{'type': 'store', 'text': 'x', 'variable': 'v'}], driver=fake_driver,
                   initial_vars={'seed': 's'})
    await run.start()
    await run.next()
    assert run.vars == {'seed': 's', 'v': 'x'}

    await run.reset()

    assert run.vars == {'seed': 's'}
    assert run.step_index == -1
    assert run.success is True
    assert run.state is RunState.NOT_STARTED
    assert run.driver is None
    assert fake_driver.quit_count == 1


@pytest.mark.asyncio
async def test_shared_session_handoff(make_run, fake_driver):
    first = make_run([{'type': 'store', 'text': 'tok', 'variable': 'token'}], driver=fake_driver, name='first')
    second = make_run([{'type': 'print', 'text': '${token}'}], driver=FakeDriver(), name='second',
                      initial_vars={'row': '1'})
    first.defer_teardown = True
    second.inherit_from = first

    assert (await first.run()).success is True
    assert fake_driver.quit_count == 0
    assert first.driver is fake_driver

    assert (await second.run()).success is True
    assert second.vars == {'token': 'tok', 'row': '1'}
    assert first.driver is None
    assert fake_driver.quit_count == 1
    assert fake_driver.calls.count(('init',)) == 1


@pytest.mark.asyncio
async def test_inherit_without_live_session_fails_to_start(make_run):
    first = make_run([], name='first')
    second = make_run([], name='second')
    second.inherit_from = first
    result = await second.run()
    assert result.success is False
    assert 'No session to inherit' in str(result.error.__cause__)
