import re

# WebDriver key codes (private-use unicode points), usable in step text as !{NAME}
KEYS = {
    'NULL': '\ue000',
    'CANCEL': '\ue001',
    'HELP': '\ue002',
    'BACKSPACE': '\ue003',
    'BACK_SPACE': '\ue003',
    'TAB': '\ue004',
    'CLEAR': '\ue005',
    'RETURN': '\ue006',
    'ENTER': '\ue007',
    'SHIFT': '\ue008',
    'LEFT_SHIFT': '\ue008',
    'CONTROL': '\ue009',
    'LEFT_CONTROL': '\ue009',
    'ALT': '\ue00a',
    'LEFT_ALT': '\ue00a',
    'PAUSE': '\ue00b',
    'ESCAPE': '\ue00c',
    'SPACE': '\ue00d',
    'PAGE_UP': '\ue00e',
    'PAGE_DOWN': '\ue00f',
    'END': '\ue010',
    'HOME': '\ue011',
    'LEFT': '\ue012',
    'ARROW_LEFT': '\ue012',
    'UP': '\ue013',
    'ARROW_UP': '\ue013',
    'RIGHT': '\ue014',
    'ARROW_RIGHT': '\ue014',
    'DOWN': '\ue015',
    'ARROW_DOWN': '\ue015',
    'INSERT': '\ue016',
    'DELETE': '\ue017',
    'SEMICOLON': '\ue018',
    'EQUALS': '\ue019',
    'NUMPAD0': '\ue01a',
    'NUMPAD1': '\ue01b',
    'NUMPAD2': '\ue01c',
    'NUMPAD3': '\ue01d',
    'NUMPAD4': '\ue01e',
    'NUMPAD5': '\ue01f',
    'NUMPAD6': '\ue020',
    'NUMPAD7': '\ue021',
    'NUMPAD8': '\ue022',
    'NUMPAD9': '\ue023',
    'MULTIPLY': '\ue024',
    'ADD': '\ue025',
    'SEPARATOR': '\ue026',
    'SUBTRACT': '\ue027',
    'DECIMAL': '\ue028',
    'DIVIDE': '\ue029',
    'F1': '\ue031',
    'F2': '\ue032',
    'F3': '\ue033',
    'F4': '\ue034',
    'F5': '\ue035',
    'F6': '\ue036',
    'F7': '\ue037',
    'F8': '\ue038',
    'F9': '\ue039',
    'F10': '\ue03a',
    'F11': '\ue03b',
    'F12': '\ue03c',
    'META': '\ue03d',
    'COMMAND': '\ue03d',
}

_KEY_TOKEN = re.compile(r'!\{([A-Za-z0-9_]+)\}')


def key_code(name: str):
    """Look up a key by name; 'KEY_' prefixes and lowercase are accepted."""
    name = name.upper()
    if name.startswith('KEY_'):
        name = name[len('KEY_'):]
    return KEYS.get(name)


def substitute_keys(value: str) -> str:
    """Replace !{NAME} tokens with key codes, leaving unknown names alone."""
    def replace(match):
        code = key_code(match.group(1))
        return match.group(0) if code is None else code

    return _KEY_TOKEN.sub(replace, value)
