"""
Промпты для AI совета по профилю
"""

SYSTEM_PROMPT = 'You are a concise, encouraging career coach for students.'

_ADVICE_TEMPLATE = (
    'Give concise, positive advice (2–3 sentences) for a high school student '
    "whose AI mindset profile is '{profile}'."
)

# Добавляется к локальному совету, когда AI недоступен
FALLBACK_NOTE = '\n\n(Note: AI advice unavailable, showing local guidance.)'


def build_advice_prompt(profile: str) -> str:
    """User-промпт с подписью профиля"""
    return _ADVICE_TEMPLATE.format(profile=profile)


def with_fallback_note(local_advice: str) -> str:
    return local_advice + FALLBACK_NOTE


# Для быстрого тестирования
if __name__ == '__main__':
    print('=== SYSTEM PROMPT ===')
    print(SYSTEM_PROMPT)
    print('\n=== USER PROMPT ===')
    print(build_advice_prompt('Curious Learner'))
