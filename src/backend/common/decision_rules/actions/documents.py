from __future__ import annotations

from ..action import ActionHandler
from ..context import RuleContext
from ..models import ActionType, DecisionRule, DocumentCategory, EvaluationResult, RequiredDocument
from ..payloads import DocumentsPayload
from ..registry import register_action


@register_action
class RequireDocumentAction(ActionHandler):
    # Append-only; duplicates across rules are kept.
    action_type = ActionType.REQUIRE_DOCUMENT.value
    action_title = "Require document"
    payload_model = DocumentsPayload

    def apply(self, result: EvaluationResult, payload: DocumentsPayload, *, rule: DecisionRule, ctx: RuleContext) -> None:
        if payload.documents:
            for doc in payload.documents:
                result.required_documents.append(RequiredDocument(name=doc.name, category=doc.category))
        elif payload.target:
            result.required_documents.append(
                RequiredDocument(name=payload.target, category=DocumentCategory.MANDATORY)
            )
