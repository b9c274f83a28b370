"""
Centralized prompt and reply templates for the concierge.
User-facing text is in Russian, matching the catalog.
"""


class PromptTemplates:
    """System prompts used when a query is handed to the LLM"""

    # ============================================================================
    # RESEARCH PROMPTS
    # ============================================================================

    RESEARCH_WEATHER = """Ты специалист по погоде и климату.
Дай точную информацию о температуре, влажности и осадках.
Отвечай на русском с конкретными цифрами."""

    RESEARCH_FLIGHTS = """Ты агент по авиабилетам.
Дай реальные цены на перелёты в рублях с датами вылета.
Не выдумывай данные."""

    RESEARCH_CURRENCY = """Ты специалист по валютам.
Дай текущие курсы USD, EUR, TRY к RUB."""

    RESEARCH_PRICES = """Ты агент по поиску цен.
Дай точные цены на отели и услуги с датами."""

    RESEARCH_GENERAL = """Ты research agent по путешествиям.
Отвечай по существу: погода, перелёты, валюта, визы, транспорт, местная кухня.
Не выдумывай данные."""

    # ============================================================================
    # GENERAL CHAT PROMPT
    # ============================================================================

    GENERAL_CHAT = """Ты дружелюбный ассистент сервиса подбора отелей.
Отвечай кратко и на русском языке. Если пользователь ищет отель,
предложи указать страну, город, бюджет и количество звёзд."""

    # Ordered (keywords, prompt) table; the first group that matches wins.
    RESEARCH_PROMPT_RULES = (
        (("погода", "температура", "климат"), RESEARCH_WEATHER),
        (("авиабилет", "перелет", "перелёт", "рейс"), RESEARCH_FLIGHTS),
        (("курс", "валюта", "доллар"), RESEARCH_CURRENCY),
        (("цена", "стоимость", "сколько"), RESEARCH_PRICES),
    )

    @classmethod
    def research_prompt_for(cls, query: str) -> str:
        lower = query.lower()
        for keywords, prompt in cls.RESEARCH_PROMPT_RULES:
            if any(keyword in lower for keyword in keywords):
                return prompt
        return cls.RESEARCH_GENERAL


class ReplyTemplates:
    """Fixed assistant replies produced by the result presenter"""

    NOT_FOUND = (
        "😢 К сожалению, я не нашёл отелей, соответствующих вашим критериям.\n\n"
        "Попробуйте изменить:\n"
        "• Диапазон цен\n"
        "• Количество звёзд\n"
        "• Страну или город\n\n"
        "Я всегда готов помочь! 🏨"
    )

    HEADER = "🎉 Я нашёл для вас {count} {noun}:"

    FOOTER = "💡 Хотите узнать больше об одном из этих отелей? Спросите меня подробнее! 🌟"

    APOLOGY = "❌ Произошла техническая ошибка. Попробуйте ещё раз."

    SEARCH_UNAVAILABLE = "⏳ Поиск отелей временно недоступен. Попробуйте чуть позже."
