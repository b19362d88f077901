"""Keyword data behind the import heuristics.

Everything here is data, not behaviour: callers can build their own
``Lexicon`` (for another market or a tuned keyword set) and pass it to the
categorizer, the card-payment classifier and the import orchestrator.
The defaults target Spanish bank statements.
"""

from dataclasses import dataclass, field
from typing import Optional

from ledgerkit.domain.entities import (
    CategoryStructure,
    TransactionType,
    DEFAULT_CATEGORY,
    TRANSFER_CATEGORY,
)


@dataclass(frozen=True)
class MerchantRule:
    """Description keywords that identify a category (and subcategory)."""

    keywords: tuple[str, ...]
    category: str
    subcategory: Optional[str] = None


DEFAULT_TAXONOMY: tuple[CategoryStructure, ...] = (
    CategoryStructure("Food", ("Supermarkets", "Local shops")),
    CategoryStructure("Dining", ("Restaurants", "Delivery")),
    CategoryStructure("Transport", ("Fuel", "Public transport", "Flights", "Parking and tolls")),
    CategoryStructure("Housing", ("Rent", "Furniture", "Electricity", "Water", "Internet and phone")),
    CategoryStructure("Health", ("Medical", "Pharmacy", "Beauty")),
    CategoryStructure("Leisure", ("Subscriptions", "Entertainment", "Sports")),
    CategoryStructure("Shopping", ("General", "Clothing", "Electronics")),
    CategoryStructure("Education", ("Courses", "Books")),
    CategoryStructure("Insurance", ("Car", "Home", "Health")),
    CategoryStructure("Taxes and fees", ("Bank fees", "Taxes")),
    CategoryStructure(TRANSFER_CATEGORY, ("Between accounts", "From another account", "Sent", "Cash")),
    CategoryStructure("Income", ("Salary", "Refunds", "Other income"), TransactionType.INCOME),
    CategoryStructure(DEFAULT_CATEGORY),
)

DEFAULT_MERCHANT_RULES: tuple[MerchantRule, ...] = (
    MerchantRule(
        ("MERCADONA", "CARREFOUR", "LIDL", "ALDI", "AHORRAMAS", "CONSUM", "EROSKI",
         "HIPERCOR", "ALCAMPO", "CAPRABO", "BONPREU", "CONDIS", "GADIS", "COVIRAN",
         "ALIMERKA", "SUPERMERCADO", "SUPERMERCADOS", "HIPERMERCADO"),
        "Food", "Supermarkets",
    ),
    MerchantRule(
        ("PANADERIA", "FRUTERIA", "CARNICERIA", "PESCADERIA", "CHARCUTERIA", "PASTELERIA"),
        "Food", "Local shops",
    ),
    MerchantRule(
        ("RESTAURANTE", "CAFETERIA", "MC DONALD", "MCDONALDS", "BURGER KING", "KFC",
         "STARBUCKS", "TELEPIZZA", "DOMINOS", "100 MONTADITOS", "VIPS", "GOIKO",
         "FIVE GUYS", "RODILLA"),
        "Dining", "Restaurants",
    ),
    MerchantRule(("GLOVO", "JUST EAT", "UBER EATS", "DELIVEROO"), "Dining", "Delivery"),
    MerchantRule(
        ("REPSOL", "CEPSA", "GASOLINERA", "ESTACION SERV", "GALP", "BALLENOIL", "PLENOIL",
         "PETRONOR", "CAMPSA"),
        "Transport", "Fuel",
    ),
    MerchantRule(
        ("RENFE", "METRO", "ALSA", "EMT", "TMB", "CERCANIAS", "TRANVIA", "AUTOBUS",
         "CABIFY", "UBER", "FREENOW", "TAXI", "BOLT"),
        "Transport", "Public transport",
    ),
    MerchantRule(
        ("RYANAIR", "IBERIA", "VUELING", "AIR EUROPA", "EASYJET", "BINTER", "VOLOTEA"),
        "Transport", "Flights",
    ),
    MerchantRule(
        ("PARKING", "APARCAMIENTO", "TELPARK", "ZONA AZUL", "PEAJE", "AUTOPISTA", "VIA T"),
        "Transport", "Parking and tolls",
    ),
    MerchantRule(("ALQUILER", "ARRENDAMIENTO"), "Housing", "Rent"),
    MerchantRule(
        ("IKEA", "LEROY MERLIN", "BAUHAUS", "CONFORAMA", "ZARA HOME", "BRICOMART"),
        "Housing", "Furniture",
    ),
    MerchantRule(
        ("ENDESA", "IBERDROLA", "NATURGY", "HOLALUZ", "SOM ENERGIA", "LUCERA"),
        "Housing", "Electricity",
    ),
    MerchantRule(("CANAL ISABEL", "AGUAS", "AQUALIA", "AGBAR"), "Housing", "Water"),
    MerchantRule(
        ("TELEFONICA", "MOVISTAR", "ORANGE", "VODAFONE", "YOIGO", "PEPEPHONE", "SIMYO",
         "LOWI", "DIGI", "JAZZTEL", "MASMOVIL"),
        "Housing", "Internet and phone",
    ),
    MerchantRule(("FARMACIA",), "Health", "Pharmacy"),
    MerchantRule(
        ("OPTICA", "DENTAL", "FISIO", "HOSPITAL", "CLINICA", "SANITAS", "ADESLAS",
         "CENTRO MEDICO"),
        "Health", "Medical",
    ),
    MerchantRule(
        ("PELUQUERIA", "BARBERIA", "ESTETICA", "DRUNI", "PRIMOR", "SEPHORA", "DOUGLAS"),
        "Health", "Beauty",
    ),
    MerchantRule(
        ("NETFLIX", "SPOTIFY", "DISNEY PLUS", "AMAZON PRIME", "PRIME VIDEO", "HBO",
         "APPLE.COM/BILL", "PLAYSTATION", "NINTENDO", "STEAM", "DAZN", "FILMIN"),
        "Leisure", "Subscriptions",
    ),
    MerchantRule(
        ("CINE", "YELMO", "CINESA", "KINEPOLIS", "TEATRO", "CONCIERTO", "TICKETMASTER", "MUSEO"),
        "Leisure", "Entertainment",
    ),
    MerchantRule(
        ("GIMNASIO", "GYM", "BASIC FIT", "MCFIT", "ALTAFIT", "VIVAGYM", "GO FIT", "PISCINA"),
        "Leisure", "Sports",
    ),
    MerchantRule(
        ("EL CORTE INGLES", "AMAZON", "ALIEXPRESS", "TEMU", "SHEIN", "MIRAVIA"),
        "Shopping", "General",
    ),
    MerchantRule(
        ("ZARA", "H&M", "MANGO", "PULL & BEAR", "STRADIVARIUS", "BERSHKA", "MASSIMO DUTTI",
         "PRIMARK", "DECATHLON", "NIKE", "ADIDAS", "ZALANDO"),
        "Shopping", "Clothing",
    ),
    MerchantRule(
        ("MEDIA MARKT", "WORTEN", "PC COMPONENTES", "APPLE STORE", "FNAC"),
        "Shopping", "Electronics",
    ),
    MerchantRule(
        ("COLEGIO", "UNIVERSIDAD", "CURSO", "ACADEMIA", "UDEMY", "COURSERA", "MATRICULA"),
        "Education", "Courses",
    ),
    MerchantRule(("LIBRERIA", "PAPELERIA", "CASA DEL LIBRO"), "Education", "Books"),
    MerchantRule(
        ("MAPFRE", "MUTUA", "LINEA DIRECTA", "ALLIANZ", "AXA", "ZURICH", "PELAYO",
         "VERTI", "SEGURO"),
        "Insurance",
    ),
    MerchantRule(
        ("COMISION", "MANTENIMIENTO", "INTERESES", "CUOTA TARJETA", "RECARGO", "DESCUBIERTO"),
        "Taxes and fees", "Bank fees",
    ),
    MerchantRule(
        ("AEAT", "AGENCIA TRIBUTARIA", "SEGURIDAD SOCIAL", "IBI", "AYUNTAMIENTO",
         "IMPUESTO", "MULTA", "DGT"),
        "Taxes and fees", "Taxes",
    ),
    MerchantRule(("NOMINA", "SALARIO", "PAYROLL", "SALARY"), "Income", "Salary"),
    MerchantRule(("DEVOLUCION", "REEMBOLSO", "REFUND"), "Income", "Refunds"),
    MerchantRule(("BIZUM", "TRANSFERENCIA A", "TRASPASO", "PAYPAL"), TRANSFER_CATEGORY, "Sent"),
    MerchantRule(
        ("CAJERO", "RETIRADA EFECTIVO", "DISPOSICION EFECTIVO", "ATM"),
        TRANSFER_CATEGORY, "Cash",
    ),
)

# Names banks and users put in category columns -> canonical taxonomy names.
# Keys are lowercase and accent-free.
DEFAULT_CATEGORY_ALIASES: dict[str, str] = {
    "alimentacion": "Food",
    "supermercado": "Food",
    "groceries": "Food",
    "comida y bebida": "Dining",
    "restaurantes": "Dining",
    "restaurants": "Dining",
    "transporte": "Transport",
    "vivienda": "Housing",
    "hogar": "Housing",
    "home": "Housing",
    "salud": "Health",
    "ocio": "Leisure",
    "entertainment": "Leisure",
    "compras": "Shopping",
    "educacion": "Education",
    "seguros": "Insurance",
    "impuestos y tasas": "Taxes and fees",
    "impuestos": "Taxes and fees",
    "taxes": "Taxes and fees",
    "transferencia": TRANSFER_CATEGORY,
    "transferencias": TRANSFER_CATEGORY,
    "transfers": TRANSFER_CATEGORY,
    "ingresos": "Income",
    "nomina": "Income",
    "salary": "Income",
    "otros": DEFAULT_CATEGORY,
    "others": DEFAULT_CATEGORY,
    "misc": DEFAULT_CATEGORY,
}

# Phrases showing a bank line settles a credit card rather than buys something.
DEFAULT_CARD_PAYMENT_PHRASES: tuple[str, ...] = (
    "pago tarjeta",
    "liquidacion tarjeta",
    "recibo tarjeta",
    "cargo tarjeta",
    "pago visa",
    "pago mastercard",
    "pago amex",
    "domiciliacion tarjeta",
    "liq. tarjeta",
    "abono tarjeta",
    "tarjeta credito",
    "credit card payment",
)

# Header keywords used to auto-map columns when no bank template is chosen.
DEFAULT_COLUMN_KEYWORDS: dict[str, tuple[str, ...]] = {
    "date": ("date", "fecha", "time"),
    "amount": ("amount", "cantidad", "importe", "monto", "valor"),
    "description": ("description", "descripcion", "concepto", "memo", "detail", "payee"),
    "category": ("category", "categoria"),
    "subcategory": ("subcategory", "subcategoria", "subcat"),
    "type": ("type", "tipo"),
}

# Values of a mapped type column and the direction they stand for.
DEFAULT_TYPE_KEYWORDS: dict[TransactionType, tuple[str, ...]] = {
    TransactionType.INCOME: ("income", "ingreso", "abono", "credit", "topup", "haber", "deposit"),
    TransactionType.EXPENSE: ("expense", "gasto", "cargo", "debit", "card_payment", "debe", "payment"),
}


@dataclass(frozen=True)
class Lexicon:
    """Keyword tables used by the import heuristics."""

    merchant_rules: tuple[MerchantRule, ...] = DEFAULT_MERCHANT_RULES
    category_aliases: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CATEGORY_ALIASES))
    card_payment_phrases: tuple[str, ...] = DEFAULT_CARD_PAYMENT_PHRASES
    column_keywords: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_COLUMN_KEYWORDS)
    )
    type_keywords: dict[TransactionType, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_TYPE_KEYWORDS)
    )
    default_category: str = DEFAULT_CATEGORY
    missing_description: str = "No description"


DEFAULT_LEXICON = Lexicon()
