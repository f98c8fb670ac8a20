"""
Seed data for the demo dataset.

Site names and catalog rows come from a real electrical contractor's stock
report: quantity on hand and total value per SKU. Unit cost is derived as
value / quantity.
"""

from src.core.entities.item import ItemCategory
from src.core.entities.site import SiteType
from src.core.entities.user import UserRole

CITIES = ["Bogotá", "Medellín", "Cali", "Barranquilla", "Cartagena", "Pereira", "Zipaquirá"]

# (name, type, budget)
SITE_SEEDS: list[tuple[str, SiteType, float]] = [
    ("ALMACEN STOCK MEDELLIN", SiteType.CENTRAL_WAREHOUSE, 0),
    ("ALMACEN STOCK BOGOTA", SiteType.CENTRAL_WAREHOUSE, 0),
    ("URB SALITRE LIVING BOG", SiteType.RESIDENTIAL, 1_500_000_000),
    ("SFV GRANJA LA FE BAQ", SiteType.SOLAR, 2_200_000_000),
    ("CLINICA COMEDAL MDE", SiteType.COMMERCIAL, 1_800_000_000),
    ("WAKE 2.0 MDE", SiteType.RESIDENTIAL, 1_200_000_000),
    ("SFV IED INMACULADA CONCE BAQ", SiteType.SOLAR, 900_000_000),
    ("NAVITRANS PEI", SiteType.INDUSTRIAL, 800_000_000),
    ("ALMA 72 BOG", SiteType.RESIDENTIAL, 1_100_000_000),
    ("NOMAD CABRERA BOG", SiteType.RESIDENTIAL, 950_000_000),
    ("SFV BOMBEROS TECNOGLASS BAQ", SiteType.SOLAR, 600_000_000),
    ("CLICK CLACK WE MDE", SiteType.COMMERCIAL, 1_400_000_000),
    ("SFV ALKOSTO MOSQUERA MOS", SiteType.SOLAR, 2_500_000_000),
]

# (sku, name, quantity on hand, total value)
CATALOG_ROWS: list[tuple[str, str, int, int]] = [
    ("HJ000099", "CABLE 12 AWG FUERZA LSHF TC 600V 90C VERDE", 29365, 58888041),
    ("005644", 'TUERCA 3/8"', 22698, 1992928),
    ("000269", "ARANDELA 3/8", 21294, 2255060),
    ("HJ000107", "CABLE 10 AWG FUERZA LSHF TC 600 V 90 C BLANCO", 6163, 19515522),
    ("HJ000110", "CABLE 10 AWG FUERZA LSHF TC 600 V 90 C AZUL", 5748, 18004512),
    ("004704", "TAPA 12X12 LISA GRIS", 4524, 10081288),
    ("HJ000114", "CABLE 8 AWG FUERZA LSHF TC 600V 90C NEGRO", 4221, 15117154),
    ("005698", 'UNION EMT 3/4"', 2211, 2197742),
    ("009383", "CABLE 6 AWG FUERZA LSHF TC600V 90C NEGRO", 2538, 21217903),
    ("013472", "CABLE 2/0 LSHF ALUMINIO", 2407, 17010662),
    ("009590", "CABLE 4/0 LSHF ALUMINIO", 2135, 21003831),
    ("005568", 'TUBO EMT 3/4"', 958, 15866637),
    ("005627", 'TUBO PVC 3/4"', 997, 4627277),
    ("001126", "CABLE CU.D 1/0", 858, 24369681),
    ("005553", 'TUBO EMT 1"', 760, 16872370),
    ("001339", "CABLE XLPE ALUMINIO 1/0 15KV 100% PANTALLA CINTA", 239, 6166200),
    ("001129", "CABLE CU.D 2/0", 558, 20172849),
    ("005559", 'TUBO EMT 1/2"', 565, 5096113),
    ("009384", "CABLE 4 AWG FUERZA LSHF TC 600V 90C NEGRO", 869, 9905085),
    ("009385", "CABLE 2 AWG FUERZA LSHF TC 600V 90C NEGRO", 1396, 28463916),
    ("005557", 'TUBO EMT 1.1/2"', 122, 5327399),
    ("009392", "CABLE 350 kCMIL FUERZA LSHF TC 600V 90C NEGRO", 226, 23114446),
    ("009386", "CABLE 1/0 AWG FUERZA LSHF TC 600V 90C NEGRO", 455, 10905581),
    ("005562", 'TUBO EMT 3"', 101, 10940516),
    ("49099", "TRAMO RECTO BLINDOBARRA 630 AMP 3P4W+50%E", 99, 79688664),
    ("49089", "TRAMO RECTO BLINDOBARRA 800 AMP 4W(200%N)+50%E", 95, 92933940),
    ("002441", "DUCTO 40X10 GALVANIZADA", 116, 14709331),
    ("009393", "CABLE 500 kCMIL FUERZA LSHF TC 600V 90C NEGRO", 80, 12334846),
    ("004640", "TABLERO 3F 12 CTOS ESPACIO PARA TOTALIZADOR SCHNEIDER", 61, 16559359),
    ("63915", "LUMINARIA LED TIPO HERMÉTICA 36W EMERGENCIA", 164, 61664000),
    ("49079", "TRAMO RECTO BLINDOBARRA 1250 AMP 3P4W+50%E", 157, 183718260),
    ("HJ000102", "CABLE 12 AWG FUERZA LSHF TC 600V 90C ROJO", 15149, 32295177),
    ("HJ000103", "CABLE 12 AWG FUERZA LSHF TC 600V 90C BLANCO", 13504, 28838253),
    ("HJ000101", "CABLE 12 AWG FUERZA LSHF TC 600V 90C AZUL", 13978, 29946809),
    ("HJ000100", "CABLE 12 AWG FUERZA LSHF TC 600V 90C AMARILLO", 11676, 25066975),
    ("009389", "CABLE 4/0 AWG FUERZA LSHF TC 600V 90C NEGRO", 500, 31694000),
    ("47078", "TRANSFORMADOR PARA 800KVA BT-BT", 2, 110424800),
    ("017197", "INVERSOR HUAWEI SUN2000 80K-MGL0 220V", 2, 37539600),
    ("47212", "T-DISTRIBUCIÓN ALUMBRADO – TOMAS - DATACENTER C4 DU", 1, 62750000),
    ("47204", "CELDA GENERAL TRANSFERENCIA A 480VAC LABORATORIOS", 1, 62502000),
    ("47079", "TRANSFORMADOR PARA 630KVA BT-BT", 1, 47433000),
    ("68951", "TABLERO 103COLP-01", 1, 44635841),
    ("70673", "LUMINARIA LED TIPO HIGH BAY 174W", 64, 46425600),
    ("68949", "TABLERO BANCO CONDENSADORES 75 KVAR", 1, 40468180),
    ("002862", 'GRAPA GALVAN DOBLE ALA 3/4"', 7230, 1357378),
    ("001992", "CONECTOR RESORTE GARDEN - BENDER 10-12 ROJO", 15557, 3075006),
    ("001714", 'CHAZO NYLON DE 1/4 X 1.1/2"', 12631, 1809511),
    ("001722", 'CHAZO PLASTICO SUPRA 1/4X1,1/4"', 10103, 1754605),
    ("006017", "MARCACION TIPO ANILLO AR1", 5662, 905920),
    ("004986", "TERMINAL DE OJO 10-12 DE 1/4", 8199, 1721645),
    ("000266", "ARANDELA 1/4", 6935, 496623),
    ("005330", 'TORNILLO CABEZA LENTEJA 1/4X1/2"', 3958, 404247),
    ("002196", "CAJA DE EMPALME 12X12X5 GRIS", 865, 3559541),
    ("71132", "CABLE GENESIS 2X16 SIN BLINDAR CARRETE", 1206, 3453550),
    ("001190", "CABLE FIBRA OPTICA MULT. 12HILOS 50/125 LEVITON", 20, 295800),
    ("001325", "CABLE UTP CATEGORIA 6A", 1016, 2331377),
    ("002556", "ESPARRAGO DE 3/8 X 3 MTRS", 445, 4077769),
    ("001170", "CABLE ENCAUCHETADO 3X16", 512, 1937034),
    ("005132", "TOMA DOBLE LEVITON BLANCO PAT", 645, 3351137),
    ("006294", "SOPORTE BEAM CLAMP 3/8", 574, 3359076),
    ("003841", "PERFIL RANURADO 4X4 X 3MTS GALVANIZADO", 120, 5200698),
]

# Keyword -> category, first match wins
CATEGORY_KEYWORDS: list[tuple[ItemCategory, tuple[str, ...]]] = [
    (ItemCategory.CABLES, ("CABLE", "ALAMBRE", "CONDUCTOR", "CORDON")),
    (
        ItemCategory.PIPING,
        ("TUBO", "CURVA", "UNION", "ADAPTADOR", "CANALETA", "DUCTO", "BANDEJA", "CODO", "CONDULETE"),
    ),
    (
        ItemCategory.PROTECTION,
        ("BREAKER", "TABLERO", "TOTALIZADOR", "TOMA", "INTERR", "DPS", "TRANSFORMADOR", "CELDA", "GABINETE"),
    ),
    (ItemCategory.LIGHTING, ("LUMINARIA", "REFLECTOR", "BALA", "BOMBILLO", "LED", "PANEL")),
    (
        ItemCategory.TOOLING,
        ("BROCA", "SIERRA", "ALICATE", "DESTORNILLADOR", "HERRAMIENTA", "TALADRO", "MULTIMETRO", "PINZA", "PONCHADORA", "MOLDE"),
    ),
]

# Items sold by length
LENGTH_UNIT_KEYWORDS = ("CABLE", "TUBO")

TOOL_BRANDS = ["DeWalt", "Bosch", "Makita", "Fluke", "Hilti", "Klein Tools"]

# (id, username, name, role, assigned site index)
USER_SEEDS: list[tuple[str, str, str, UserRole, int | None]] = [
    ("u1", "admin", "Carlos Admin", UserRole.ADMIN, None),
    ("u2", "director", "Ana Directora", UserRole.DIRECTOR, None),
    ("u3", "obra", "Juan Residente", UserRole.SITE_MANAGER, 0),
    ("u4", "compras", "Maria Compras", UserRole.PURCHASING, None),
]

REJECTION_REASONS = [
    "Stock reserved for the origin project",
    "Transfer cost exceeds purchase cost",
    "Duplicate request",
]


def category_for(name: str) -> ItemCategory:
    upper = name.upper()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in upper for keyword in keywords):
            return category
    return ItemCategory.ACCESSORIES


def unit_for(name: str) -> str:
    return "mts" if any(k in name for k in LENGTH_UNIT_KEYWORDS) else "und"
