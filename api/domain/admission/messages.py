# api/domain/admission/messages.py
"""User-facing text per reason code. The UI renders these, never a generic failure."""
from __future__ import annotations

from .enums import ReasonCode

MESSAGES: dict[ReasonCode, str] = {
    ReasonCode.COMPANY_MISMATCH: "소속 계열사의 등록 페이지에서만 결제할 수 있습니다.",
    ReasonCode.COMPANY_INACTIVE: "현재 해당 계열사는 등록이 비활성화되어 있습니다.",
    ReasonCode.WINDOW_CLOSED: "등록 기간이 아닙니다.",
    ReasonCode.NO_SELECTION: "회원권을 하나 선택해 주세요.",
    ReasonCode.PRODUCT_DISABLED: "선택한 회원권은 현재 비활성화되어 있습니다.",
    ReasonCode.SOLD_OUT: "마감되었습니다.",
    ReasonCode.NOT_WHITELISTED_FOR_PRODUCT: "선택한 회원권은 추첨 명단에 포함되어 있지 않습니다.",
    ReasonCode.NOT_ON_WHITELIST: "추첨 명단에 등록되어 있지 않습니다. 계열사 담당자에게 문의하세요.",
    ReasonCode.LOCKER_DISABLED: "개인사물함은 현재 신청할 수 없습니다.",
    ReasonCode.PERIOD_OVERLAP: "이미 같은 기간의 이용권이 있습니다. 동일한 기간은 중복 결제할 수 없습니다.",
    ReasonCode.AGREEMENT_REQUIRED: "필수 동의 항목에 동의해 주세요.",
}

# Finer wording for WINDOW_CLOSED; the code stays the same.
WINDOW_NOT_OPEN_MESSAGE = "등록 기간 전입니다."
WINDOW_ENDED_MESSAGE = "등록 기간이 종료되었습니다."


def message_for(code: ReasonCode) -> str:
    return MESSAGES[code]
