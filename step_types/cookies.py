import time

from interpreter.exceptions import InterpreterError
from interpreter.results import StepResult
from .base import action, getter


@getter('CookieByName', cmp='value')
async def cookie_by_name(tr):
    name = tr.p('name')
    for cookie in await tr.do('all_cookies'):
        if cookie.get('name') == name:
            return cookie.get('value')
    return StepResult.failed(InterpreterError(f"No cookie with name {name} found."))


@getter('CookiePresent')
async def cookie_present(tr):
    name = tr.p('name')
    return any(c.get('name') == name for c in await tr.do('all_cookies'))


def parse_cookie_options(options: str) -> dict:
    """Parse 'path=/,max_age=3600' style options into W3C cookie fields."""
    fields = {}
    for entry in options.split(','):
        if '=' not in entry:
            continue
        key, value = (part.strip() for part in entry.split('=', 1))
        if key == 'max_age':
            fields['expiry'] = int(time.time()) + int(value)
        elif key in ('secure', 'httpOnly'):
            fields[key] = value.lower() == 'true'
        elif key:
            fields[key] = value
    return fields


@action('addCookie')
async def add_cookie(tr):
    cookie = {'name': tr.p('name'), 'value': tr.p('value')}
    if 'options' in tr.current_step():
        cookie.update(parse_cookie_options(tr.p('options')))
    await tr.do('add_cookie', cookie)


@action('deleteCookie')
async def delete_cookie(tr):
    await tr.do('delete_cookie', tr.p('name'))
