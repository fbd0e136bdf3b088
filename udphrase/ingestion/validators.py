# udphrase/ingestion/validators.py
from conllu import TokenList
from collections import Counter
from typing import Any, Dict, Iterable, List
import logging

logger = logging.getLogger(__name__)


def _issue_kind(issue: str) -> str:
    # "Token 3: HEAD не является числом (None)" -> "HEAD не является числом"
    if issue.startswith(("Token", "ERROR")):
        issue = issue.split(":", 1)[1]
    return issue.split("(")[0].strip()


class ValidationResult:
    """DTO для результатов валидации."""

    def __init__(self, is_valid: bool, errors: List[str]):
        self.is_valid = is_valid
        self.errors = errors


class DataValidator:
    """
    Валидатор предложений в формате CoNLL-U.

    Проверяет только формат строк и метаданные. Форма дерева (число корней,
    циклы, HEAD вне диапазона) проверяется в DependencyTree, чтобы такие
    предложения доходили до ядра и падали со StructuralError.
    """

    @staticmethod
    def validate_sentence(token_list: TokenList, strict: bool = True) -> ValidationResult:
        errors = []

        # 1. Проверка метаданных
        if strict:
            if 'sent_id' not in token_list.metadata:
                errors.append("ERROR: Отсутствует метаполе 'sent_id'")
            if 'text' not in token_list.metadata:
                errors.append("ERROR: Отсутствует метаполе 'text'")

        # 2. Проверка токенов
        words = 0
        for token in token_list:
            token_id = token['id']

            # Мульти-словные токены (1-2) и пустые узлы (1.1) ядро не видит
            if not isinstance(token_id, int):
                continue
            words += 1

            if not token['form']:
                errors.append(f"Token {token_id}: Пустое поле FORM")

            if not token['upos'] or token['upos'] == '_':
                errors.append(f"Token {token_id}: Пустое поле UPOS")

            if not isinstance(token['head'], int):
                errors.append(f"Token {token_id}: HEAD не является числом ({token['head']!r})")

            expected_id = words
            if token_id != expected_id:
                errors.append(f"Token {token_id}: нарушена нумерация (ожидался ID {expected_id})")

        return ValidationResult(len(errors) == 0, errors)

    @staticmethod
    def validate_corpus(token_lists: Iterable[TokenList], strict: bool = True) -> Dict[str, Any]:
        """
        Отчет о формате всего файла без конвертации в AnnotatedSentence.
        Помимо построчных проверок ловит повторяющиеся sent_id и считает,
        какие проблемы встречаются чаще всего.
        """
        report = {"total": 0, "valid": 0, "invalid": 0, "issues_by_kind": Counter(), "sentences": []}
        first_seen: Dict[str, int] = {}

        for n, token_list in enumerate(token_lists, 1):
            report["total"] += 1
            sid = token_list.metadata.get('sent_id')
            issues = DataValidator.validate_sentence(token_list, strict).errors

            if sid is not None:
                if sid in first_seen:
                    issues.append(f"Duplicate sent_id ({sid}, first seen in sentence #{first_seen[sid]})")
                else:
                    first_seen[sid] = n

            if not issues:
                report["valid"] += 1
                continue

            report["invalid"] += 1
            report["issues_by_kind"].update(_issue_kind(issue) for issue in issues)
            report["sentences"].append({"id": sid or f"#{n}", "issues": issues})

        report["issues_by_kind"] = dict(report["issues_by_kind"].most_common())
        logger.info(f"Validated {report['total']} sentences: {report['invalid']} invalid")
        return report
