import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
DATA_DIR = BASE_DIR / os.getenv("DATA_DIR", "data")
SALES_DIRNAME = os.getenv("SALES_DIR", "ventas")
SALES_DIR = DATA_DIR / SALES_DIRNAME
# Reports land next to the input data unless told otherwise.
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", os.getenv("DATA_DIR", "data"))
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Filename Configuration ---
PRODUCTS_FILENAME = os.getenv("PRODUCTS_FILENAME", "productos.csv")
SALESPERSONS_FILENAME = os.getenv("SALESPERSONS_FILENAME", "vendedores.csv")
SALESPERSON_REPORT_FILENAME = os.getenv(
    "SALESPERSON_REPORT_FILENAME", "reporte_vendedores.csv"
)
PRODUCT_REPORT_FILENAME = os.getenv("PRODUCT_REPORT_FILENAME", "reporte_productos.csv")
SALES_FILE_SUFFIX = os.getenv("SALES_FILE_SUFFIX", ".csv")

# --- File Format ---
FIELD_SEPARATOR = os.getenv("FIELD_SEPARATOR", ";")
# Catalogs carry no header row by default. Set to 1 for files that have one.
CATALOG_SKIP_ROWS = int(os.getenv("CATALOG_SKIP_ROWS", "0"))

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")

# --- Report Columns ---
SALESPERSON_REPORT_COLUMNS = ["Vendedor", "TipoDoc", "Documento", "VentasTotales"]
PRODUCT_REPORT_COLUMNS = ["Producto", "Precio", "CantidadVendida"]

# Header line of a roster file. It parses as a valid salesperson, so it is
# rejected explicitly when found.
SALESPERSON_HEADER_FIELDS = ["tipodoc", "numdoc", "nombres", "apellidos"]

# --- Data Generator ---
GENERATOR_SEED = int(os.getenv("GENERATOR_SEED", "20250902"))
GENERATOR_PRODUCTS_COUNT = int(os.getenv("GENERATOR_PRODUCTS_COUNT", "50"))
GENERATOR_SALESPERSONS_COUNT = int(os.getenv("GENERATOR_SALESPERSONS_COUNT", "25"))
MIN_SALES_PER_FILE = 5
MAX_SALES_PER_FILE = 25
MIN_QTY_PER_SALE = 1
MAX_QTY_PER_SALE = 10

DOCUMENT_TYPES = ["CC", "CE", "TI"]

FIRST_NAMES = [
    "Camila",
    "Sofía",
    "Valentina",
    "Isabella",
    "Mariana",
    "Sebastián",
    "Santiago",
    "Mateo",
    "Samuel",
    "Daniel",
    "Juan",
    "Andrés",
    "María",
    "Laura",
    "Sara",
    "Nicolás",
    "David",
    "Lucía",
]

LAST_NAMES = [
    "González",
    "Rodríguez",
    "Gómez",
    "Díaz",
    "Martínez",
    "Pérez",
    "Sánchez",
    "Ramírez",
    "Torres",
    "Vargas",
    "Rojas",
    "Moreno",
    "Romero",
    "Jiménez",
    "Reyes",
    "Castaño",
    "Álvarez",
]

PRODUCT_NAME_BASES = [
    "Café",
    "Azúcar",
    "Arroz",
    "Aceite",
    "Leche",
    "Pan",
    "Galletas",
    "Chocolate",
    "Jabón",
    "Shampoo",
    "Cepillo",
    "Cuaderno",
    "Lápiz",
    "Borrador",
    "Detergente",
    "Queso",
]
