"""
Keyword tables used by the intent router and the constraint extractor.

All entries are lower-case and matched by substring containment against the
lower-cased utterance, so stems ("турц", "мальдив") cover inflected forms.
The constraint extractor also folds "ё" to "е", so its aliases avoid "ё".
"""
from typing import Tuple

# ============================================================================
# INTENT TRIGGERS
# ============================================================================

HOTEL_MAIN_TRIGGERS: Tuple[str, ...] = (
    "отель", "отели", "гостинец", "гостиница",
    "бронь", "забронировать", "хочу остановиться",
    "где остановиться", "жилье", "апартамент",
    "буклет", "каталог отелей",
    "поиск отеля", "подберите отель", "рекомендуй отель",
    "hotel", "resort",
)

HOTEL_AMENITY_TRIGGERS: Tuple[str, ...] = (
    "детский клуб", "kids club",
    "all inclusive", "all-inclusive", "олл инклюзив",
    "аквапарк", "aquapark",
    "спа", "spa", "массаж",
    "бассейн", "pool", "пляж",
    "ресторан", "кафе", "бар",
)

HOTEL_TYPE_TRIGGERS: Tuple[str, ...] = (
    "курорт", "пансионат", "санаторий",
    "5 звёзд", "4 звёзд", "3 звёзд",
    "люкс", "premium", "эконом",
)

HOTEL_DESTINATION_TRIGGERS: Tuple[str, ...] = (
    "сочи", "анапа", "ялта", "крым",
    "турция", "анталья", "кемер", "мармарис",
    "египет", "хургада", "шарм-эль-шейх", "асуан",
    "таиланд", "пхукет", "патайя", "бангкок",
    "оаэ", "дубай", "абу-даби",
    "мальдив", "мале",
    "греция", "крит", "афины",
    "испания", "барселона", "мадрид",
)

HOTEL_FILTER_TRIGGERS: Tuple[str, ...] = (
    "до ",  # "до 5000"
    "от ",  # "от 3000"
    "рублей", "₽", "руб",
    "звёзд", "звезд", "звезды",
    "с детьми", "для семьи", "с ребенком",
    "с пляжем", "с бассейном",
    "недорог", "дешев", "бюджет",
)

HOTEL_TRIGGERS: Tuple[str, ...] = (
    HOTEL_MAIN_TRIGGERS
    + HOTEL_AMENITY_TRIGGERS
    + HOTEL_TYPE_TRIGGERS
    + HOTEL_DESTINATION_TRIGGERS
    + HOTEL_FILTER_TRIGGERS
)

RESEARCH_TRIGGERS: Tuple[str, ...] = (
    # weather
    "погода", "weather", "температура", "temp", "климат", "climate",
    "тепло", "холодно", "дождь", "снег", "облака", "солнечно",
    "ветер", "влажность", "прогноз", "forecast",
    # flights
    "авиабилет", "рейс", "перелет", "flight", "цена на рейс",
    "сколько стоит билет", "цены на авиа", "билет",
    # currency
    "курс", "валюта", "доллар", "евро", "рубль", "фунт", "грн",
    "exchange rate", "currency", "usd", "eur", "gbp", "jpy",
    # transport
    "как добраться", "транспорт", "машина", "такси", "метро",
    "автобус", "поезд", "маршрут", "route", "transportation",
    # visas and documents
    "виза", "страховка", "документы", "паспорт", "visa",
    "insurance", "requirements",
    # best time to go
    "когда лучше", "сезон", "когда ехать", "best time",
    "когда дешевле", "high season", "low season",
    # sights
    "что посмотреть", "достопримечательность", "музей",
    "культура", "история", "monument", "museum", "attractions",
    # general info
    "информация о", "расскажи о", "узнать о", "tell me about",
    "информация", "как там", "что там",
    # opening hours
    "когда открыто", "режим работы", "часы работы", "opening",
    "hours", "расписание",
    # food
    "местная кухня", "еда", "блюдо", "ресторан рекомендуй",
    "пища", "dish", "cuisine", "food", "restaurant",
    # packing
    "как одеться", "одежда", "чемодан", "что брать",
    "what to pack", "clothing", "luggage",
    # generic lookups
    "поиск", "найди", "ищу", "ищем", "цена", "стоимость", "сколько стоит",
)

# ============================================================================
# CONSTRAINT ALIASES
# ============================================================================

# (canonical value, surface forms). Order matters: the first group that
# matches wins and later groups are not checked.
COUNTRY_ALIASES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Египет", ("египет", "египт", "egypt", "хургад", "шарм-эль")),
    ("Турция", ("турц", "turkey", "антал", "кемер", "мармарис")),
    ("Таиланд", ("таиланд", "тайланд", "thailand", "пхукет", "пукет", "паттай", "патай")),
    ("ОАЭ", ("оаэ", "эмират", "дубай", "абу-даби", "uae", "dubai")),
    ("Мальдивы", ("мальдив", "maldives")),
    ("Россия", ("росси", "russia", "сочи", "анап")),
)

CITY_ALIASES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Анталья", ("антал", "antalya")),
    ("Кемер", ("кемер", "kemer")),
    ("Сочи", ("сочи", "sochi")),
    ("Анапа", ("анап", "anapa")),
    ("Ялта", ("ялт", "yalta")),
    ("Дубай", ("дубай", "dubai")),
    ("Хургада", ("хургад", "hurghada")),
    ("Пхукет", ("пхукет", "пукет", "phuket")),
)

LUXURY_MARKERS: Tuple[str, ...] = (
    "5 зв", "5-зв", "пятизв", "люкс", "5 star", "5-star", "five star", "luxury",
)

KIDS_CLUB_MARKERS: Tuple[str, ...] = ("детский клуб", "детским клубом", "kids club")
ALL_INCLUSIVE_MARKERS: Tuple[str, ...] = ("all inclusive", "all-inclusive", "олл инклюзив", "все включено")
AQUAPARK_MARKERS: Tuple[str, ...] = ("аквапарк", "aquapark", "water park", "waterpark")
