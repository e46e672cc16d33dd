"""
Keyword tables for chat context extraction.

Each table is an ordered tuple of (compiled pattern, partial section).
Every matching entry is merged into its section in table order, so a
later entry overwrites keys set by an earlier one.
"""

import re
from typing import Any, Dict, Pattern, Tuple

PatternTable = Tuple[Tuple[Pattern, Dict[str, Any]], ...]


def _table(*entries) -> PatternTable:
    return tuple((re.compile(pattern, re.IGNORECASE), values) for pattern, values in entries)


# -----------------------------
# Vehicles
# -----------------------------
VEHICLE_MAKE_PATTERNS = _table(
    (r"\btoyota\b", {"type": "car", "make": "Toyota"}),
    (r"\bhonda\b", {"type": "car", "make": "Honda"}),
    (r"\bchevrolet\b|\bchevy\b", {"type": "car", "make": "Chevrolet"}),
    (r"\bmazda\b", {"type": "car", "make": "Mazda"}),
    (r"\brenault\b", {"type": "car", "make": "Renault"}),
    (r"\bnissan\b", {"type": "car", "make": "Nissan"}),
    (r"\bhyundai\b", {"type": "car", "make": "Hyundai"}),
    (r"\bkia\b", {"type": "car", "make": "Kia"}),
    (r"\bford\b", {"type": "car", "make": "Ford"}),
    (r"\bvolkswagen\b|\bvw\b", {"type": "car", "make": "Volkswagen"}),
    (r"\bsuzuki\b", {"make": "Suzuki"}),
    (r"\bbmw\b", {"type": "car", "make": "BMW"}),
    (r"\bmercedes\b", {"type": "car", "make": "Mercedes"}),
    (r"\baudi\b", {"type": "car", "make": "Audi"}),
    (r"\bpeugeot\b", {"type": "car", "make": "Peugeot"}),
    (r"\bfiat\b", {"type": "car", "make": "Fiat"}),
    (r"\byamaha\b", {"type": "motorcycle", "make": "Yamaha"}),
    (r"\bbajaj\b", {"type": "motorcycle", "make": "Bajaj"}),
    (r"\bakt\b", {"type": "motorcycle", "make": "AKT"}),
    (r"\bvespa\b", {"type": "motorcycle", "make": "Vespa"}),
)

VEHICLE_MODEL_PATTERNS = _table(
    (r"\bcorolla\b", {"make": "Toyota", "model": "Corolla"}),
    (r"\bhilux\b", {"make": "Toyota", "model": "Hilux"}),
    (r"\brav ?4\b", {"make": "Toyota", "model": "RAV4"}),
    (r"\bonix\b", {"make": "Chevrolet", "model": "Onix"}),
    (r"\bspark\b", {"make": "Chevrolet", "model": "Spark"}),
    (r"\btracker\b", {"make": "Chevrolet", "model": "Tracker"}),
    (r"\bsandero\b", {"make": "Renault", "model": "Sandero"}),
    (r"\bduster\b", {"make": "Renault", "model": "Duster"}),
    (r"\blogan\b", {"make": "Renault", "model": "Logan"}),
    (r"\bpicanto\b", {"make": "Kia", "model": "Picanto"}),
    (r"\bsportage\b", {"make": "Kia", "model": "Sportage"}),
    (r"\bcx-?5\b", {"make": "Mazda", "model": "CX-5"}),
    (r"\bversa\b", {"make": "Nissan", "model": "Versa"}),
    (r"\bkicks\b", {"make": "Nissan", "model": "Kicks"}),
    (r"\btucson\b", {"make": "Hyundai", "model": "Tucson"}),
)

# Type keywords run after makes so "moto honda" ends up as a motorcycle
VEHICLE_TYPE_PATTERNS = _table(
    (r"\b(carros?|coches?|autos?|autom[oó]vil(es)?|veh[ií]culos?|camionetas?)\b", {"type": "car"}),
    (r"\b(motos?|motocicletas?|scooters?)\b", {"type": "motorcycle"}),
)

VEHICLE_USAGE_PATTERNS = _table(
    (r"\b(uso personal|particular)\b", {"usage": "personal"}),
    (r"\b(uso comercial|comercial|taxi|carga)\b", {"usage": "commercial"}),
    (r"\b(uber|didi|cabify|indriver|plataformas?)\b", {"usage": "ridesharing"}),
)

VEHICLE_YEAR_PATTERN = re.compile(r"\b(19[89]\d|20[0-4]\d)\b")

# -----------------------------
# Pets
# -----------------------------
PET_PATTERNS = _table(
    (r"\b(perr[oa]s?|canin[oa]s?|cachorr[oa]s?)\b", {"type": "dog"}),
    (r"\b(gat[oa]s?|felin[oa]s?|minin[oa]s?)\b", {"type": "cat"}),
    (r"\bgolden\b", {"type": "dog", "breed": "Golden Retriever"}),
    (r"\blabrador\b", {"type": "dog", "breed": "Labrador"}),
    (r"\bpastor alem[aá]n\b", {"type": "dog", "breed": "Pastor Alemán"}),
    (r"\bbulldog\b", {"type": "dog", "breed": "Bulldog"}),
    (r"\bpoodle\b", {"type": "dog", "breed": "Poodle"}),
    (r"\bschnauzer\b", {"type": "dog", "breed": "Schnauzer"}),
    (r"\bbeagle\b", {"type": "dog", "breed": "Beagle"}),
    (r"\bchihuahua\b", {"type": "dog", "breed": "Chihuahua"}),
    (r"\bsiam[eé]s\b", {"type": "cat", "breed": "Siamés"}),
    (r"\bpersa\b", {"type": "cat", "breed": "Persa"}),
)

# "mi perro tiene 3 años", "un gato de 2 años"
PET_AGE_PATTERN = re.compile(r"\b(?:tiene|de)\s+(\d{1,2})\s*a[ñn]os?\b", re.IGNORECASE)

# -----------------------------
# Travel
# -----------------------------
TRAVEL_CUE_PATTERN = re.compile(
    r"\b(viaj\w*|vacaciones|vuelos?|turismo|paseo|exterior|me voy para)\b",
    re.IGNORECASE,
)

TRAVEL_DESTINATION_PATTERNS = _table(
    (r"\beurop(a|eo|ea)\b", {"destination": "Europa"}),
    (r"\b(asia|asi[aá]tic[oa])\b", {"destination": "Asia"}),
    (r"\b(norteam[eé]rica|am[eé]rica del norte|estados unidos|eeuu)\b", {"destination": "Norteamérica"}),
    (r"\b(latinoam[eé]rica|am[eé]rica latina|latam|suram[eé]rica)\b", {"destination": "Latinoamérica"}),
    (r"\bcaribe\b", {"destination": "Caribe"}),
    (r"\b(todo el mundo|mundial|internacional)\b", {"destination": "Mundial"}),
)

TRAVEL_PURPOSE_PATTERNS = _table(
    (r"\b(vacaciones|turismo|paseo)\b", {"purpose": "turismo"}),
    (r"\b(negocios?|trabajo)\b", {"purpose": "negocios"}),
    (r"\b(estudi(o|os|ar)|intercambio)\b", {"purpose": "estudios"}),
)

TRAVEL_DURATION_PATTERN = re.compile(r"\b(\d+)\s*(d[ií]as?|semanas?|mes(?:es)?)\b", re.IGNORECASE)
TRAVELERS_PATTERN = re.compile(r"\b(\d{1,2})\s*(personas|viajeros|pasajeros)\b", re.IGNORECASE)
TRAVEL_DATE_PATTERN = re.compile(
    r"\b(\d{1,2}) de (enero|febrero|marzo|abril|mayo|junio|julio|agosto|"
    r"septiembre|octubre|noviembre|diciembre)\b",
    re.IGNORECASE,
)

# -----------------------------
# Location (Colombia)
# -----------------------------
LOCATION_PATTERNS = _table(
    (r"\bcolombia\b", {"country": "Colombia"}),
    (r"\bantioquia\b", {"country": "Colombia", "region": "Antioquia"}),
    (r"\bcundinamarca\b", {"country": "Colombia", "region": "Cundinamarca"}),
    (r"\bvalle del cauca\b", {"country": "Colombia", "region": "Valle del Cauca"}),
    (r"\bbogot[aá]\b", {"country": "Colombia", "city": "Bogotá"}),
    (r"\bmedell[ií]n\b", {"country": "Colombia", "city": "Medellín"}),
    (r"\bcali\b", {"country": "Colombia", "city": "Cali"}),
    (r"\bbarranquilla\b", {"country": "Colombia", "city": "Barranquilla"}),
    (r"\bcartagena\b", {"country": "Colombia", "city": "Cartagena"}),
    (r"\bbucaramanga\b", {"country": "Colombia", "city": "Bucaramanga"}),
    (r"\bpereira\b", {"country": "Colombia", "city": "Pereira"}),
    (r"\bsanta marta\b", {"country": "Colombia", "city": "Santa Marta"}),
)

# -----------------------------
# Health
# -----------------------------
HEALTH_CONDITION_PATTERNS = _table(
    (r"\bdiabet\w*\b", {"pre_existing_conditions": ["diabetes"]}),
    (r"\b(hipertensi[oó]n|hipertens[oa]|presi[oó]n alta)\b", {"pre_existing_conditions": ["hipertensión"]}),
    (r"\basma\b", {"pre_existing_conditions": ["asma"]}),
    (r"\bc[aá]ncer\b", {"pre_existing_conditions": ["cáncer"]}),
    (r"\b(card[ií]ac[oa]|coraz[oó]n)\b", {"pre_existing_conditions": ["cardiopatía"]}),
    (r"\bembarazad[oa]\b|\bembarazo\b", {"pre_existing_conditions": ["embarazo"]}),
)

HEALTH_COVERAGE_PATTERN = re.compile(r"\b(eps|prepagada|ya tengo seguro)\b", re.IGNORECASE)
PERSON_AGE_PATTERN = re.compile(r"\btengo\s+(\d{1,3})\s*a[ñn]os\b", re.IGNORECASE)
FAMILY_SIZE_PATTERN = re.compile(r"\b(?:somos|familia de)\s+(\d{1,2})\b", re.IGNORECASE)

# -----------------------------
# Preferences
# -----------------------------
PREFERENCE_PATTERNS = _table(
    (r"\b(barat[oa]s?|econ[oó]mic[oa]s?|bajo costo|poco presupuesto)\b", {"budget": "low"}),
    (r"\bpresupuesto (medio|moderado)\b", {"budget": "medium"}),
    (r"\b(sin l[ií]mite de presupuesto|presupuesto alto)\b", {"budget": "high"}),
    (r"\bb[aá]sic[oa]\b", {"coverage_level": "basic"}),
    (r"\b(est[aá]ndar|intermedi[oa])\b", {"coverage_level": "standard"}),
    (r"\b(complet[oa]|premium|todo riesgo)\b", {"coverage_level": "premium"}),
    (r"\b(mensual(es|mente)?|al mes|cada mes)\b", {"payment_frequency": "monthly"}),
    (r"\b(anual(es|mente)?|al a[ñn]o)\b", {"payment_frequency": "yearly"}),
)

# -----------------------------
# Conversation intent
# -----------------------------
GREETINGS = (
    "hola", "hi", "hello", "buenas", "buenos dias", "buenos días", "buenas tardes",
    "buenas noches", "que tal", "qué tal", "como estas", "cómo estás", "saludos", "hey",
)
GREETING_MAX_LENGTH = 25

INSURANCE_INTENT_KEYWORDS = (
    "seguro", "seguros", "protección", "proteccion", "cobertura", "plan", "planes",
    "necesito", "busco", "quiero", "recomienda", "opciones", "compré", "compre",
    "tengo", "mi carro", "mi auto", "mi moto", "mi perro", "mi gato", "viajo", "póliza", "poliza",
)
