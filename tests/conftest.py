import os

# baza testowa w pamieci, ustawiona zanim app.utils.settings sie zaimportuje
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CATALOG_BACKEND"] = "db"
os.environ.setdefault("LOG_LEVEL", "WARNING")
