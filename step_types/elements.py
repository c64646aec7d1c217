from .base import action, getter


@getter('Text', cmp='text')
async def text(tr):
    element = await tr.locate('locator')
    return await tr.do('element_text', element)


@getter('ElementPresent')
async def element_present(tr):
    locator_type, value = tr.locator('locator')
    return len(await tr.do('find_elements', locator_type, value)) > 0


@getter('ElementAttribute', cmp='value')
async def element_attribute(tr):
    element = await tr.locate('locator')
    return await tr.do('element_attribute', element, tr.p('attributeName'))


@getter('ElementValue', cmp='value')
async def element_value(tr):
    element = await tr.locate('locator')
    return await tr.do('element_property', element, 'value')


@getter('ElementStyle', cmp='value')
async def element_style(tr):
    element = await tr.locate('locator')
    return await tr.do('element_css_value', element, tr.p('propertyName'))


@getter('ElementSelected')
async def element_selected(tr):
    element = await tr.locate('locator')
    return await tr.do('element_selected', element)


@action('click', 'clickElement')
async def click(tr):
    element = await tr.locate('locator')
    await tr.do('click_element', element)


@action('setElementText')
async def set_element_text(tr):
    element = await tr.locate('locator')
    await tr.do('clear_element', element)
    await tr.do('send_keys', element, tr.p('text'))


@action('sendKeysToElement')
async def send_keys_to_element(tr):
    element = await tr.locate('locator')
    await tr.do('send_keys', element, tr.p('text'))


@action('setElementSelected')
async def set_element_selected(tr):
    element = await tr.locate('locator')
    if not await tr.do('element_selected', element):
        await tr.do('click_element', element)


@action('setElementNotSelected')
async def set_element_not_selected(tr):
    element = await tr.locate('locator')
    if await tr.do('element_selected', element):
        await tr.do('click_element', element)
