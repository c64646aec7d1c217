import asyncio

from .base import action


@action('pause')
async def pause(tr):
    await asyncio.sleep(int(tr.p('waitTime')) / 1000)


@action('print')
async def print_text(tr):
    text = tr.p('text')
    if not tr.silence_prints:
        print(f"{tr.name}: {text}")


@action('store')
async def store(tr):
    tr.set_var(tr.p('variable'), tr.p('text'))
