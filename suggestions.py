import json
import re

from fuzzywuzzy import fuzz

SOURCE_ATTR = "data-autocomplete-source"


class SuggestionProvider:
    """入力欄に候補表示を付ける外部ウィジェットとの境界。

    bind() は要素に候補の取得元（リスト or URL）を書き込むだけで、
    絞り込みと表示はブラウザ側のウィジェットが行う。
    suggest() は同じ絞り込みをサーバー側で行う（/api/suggest 用）。
    """

    name = None

    def bind(self, element, candidates):
        if isinstance(candidates, str):
            source = candidates
        else:
            source = list(candidates)
        element[SOURCE_ATTR] = json.dumps(source, ensure_ascii=False)
        element["autocomplete"] = "off"
        return element

    def is_bound(self, element):
        return element.has_attr(SOURCE_ATTR)

    def suggest(self, candidates, term, limit=None):
        raise NotImplementedError


class JQueryUIProvider(SuggestionProvider):
    # jQuery UI の $.ui.autocomplete.filter と同じ：大文字小文字を無視した部分一致
    name = "jquery-ui"

    def suggest(self, candidates, term, limit=None):
        # 入力どおりの term で照合する（前後の空白も含める）
        if not term:
            return []
        matcher = re.compile(re.escape(term), re.IGNORECASE)
        matches = [c for c in candidates if matcher.search(c)]
        return matches[:limit] if limit else matches


class FuzzyProvider(SuggestionProvider):
    name = "fuzzy"

    def __init__(self, threshold=60):  # ← 数値を調整
        self.threshold = threshold

    def suggest(self, candidates, term, limit=None):
        term = (term or "").strip().lower()
        if not term:
            return []
        scored = []
        for position, candidate in enumerate(candidates):
            similarity = fuzz.partial_ratio(term, candidate.lower())
            if similarity >= self.threshold:
                scored.append((-similarity, position, candidate))
        scored.sort()
        matches = [candidate for _, _, candidate in scored]
        return matches[:limit] if limit else matches


PROVIDERS = {
    JQueryUIProvider.name: JQueryUIProvider,
    FuzzyProvider.name: FuzzyProvider,
}


def get_provider(name=None):
    name = name or JQueryUIProvider.name
    try:
        return PROVIDERS[name]()
    except KeyError:
        raise ValueError(f"不明なサジェストプロバイダ: {name}") from None
