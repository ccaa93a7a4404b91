"""
User-facing outcome messages.

The Korean table mirrors the texts the service has always answered with;
the English table is the neutral fallback.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class OutcomeMessages:
    ok: str
    no_file: str
    no_speech: str
    server_error: str


MESSAGES = {
    "ko": OutcomeMessages(
        ok="음성 변환 성공!",
        no_file="업로드된 파일이 없음",
        no_speech="음성 인식 불가",
        server_error="서버 오류 발생",
    ),
    "en": OutcomeMessages(
        ok="ok",
        no_file="no file uploaded",
        no_speech="no speech recognized",
        server_error="server error",
    ),
}


def messages_for(locale: str) -> OutcomeMessages:
    try:
        return MESSAGES[locale]
    except KeyError:
        raise ValueError(f"Unsupported message locale: {locale!r}") from None
