import os

# baza w pamieci i brak brokera zanim zaimportuje sie shop
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "true")
