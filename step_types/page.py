from .base import action, getter


async def _page_text(tr) -> str:
    html = await tr.do('find_element', 'css selector', 'html')
    return await tr.do('element_text', html)


@getter('TextPresent')
async def text_present(tr):
    return tr.p('text') in await _page_text(tr)


@getter('BodyText', cmp='text')
async def body_text(tr):
    return await _page_text(tr)


@getter('Title', cmp='title')
async def title(tr):
    return await tr.do('title')


@getter('CurrentUrl', cmp='url')
async def current_url(tr):
    return await tr.do('current_url')


@action('get')
async def get(tr):
    await tr.do('get', tr.p('url'))


@action('refresh')
async def refresh(tr):
    await tr.do('refresh')


@action('goBack')
async def go_back(tr):
    await tr.do('back')


@action('goForward')
async def go_forward(tr):
    await tr.do('forward')
