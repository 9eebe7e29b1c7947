APP_NAME = "ktra"
ENV_PREFIX = "KTRA_CONFIG__"
