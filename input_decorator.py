from bs4 import BeautifulSoup

from suggestions import get_provider


def decorate_input(document, selector, candidates, provider=None):
    """selector に一致する入力欄すべてに候補表示を付ける。

    一致する要素が無い場合は何もせず空リストを返す（エラーにはしない）。
    """
    provider = provider or get_provider()
    bound = []
    for element in document.select(selector):
        provider.bind(element, candidates)
        bound.append(element)
    return bound


def decorate_page(html, bindings, provider=None):
    """HTML 文字列に (selector, 候補 or URL) の組を順番に適用して返す"""
    provider = provider or get_provider()
    document = BeautifulSoup(html, "html.parser")
    for selector, source in bindings:
        decorate_input(document, selector, source, provider)
    return str(document)
