from django.apps import AppConfig


class ShipmentsConfig(AppConfig):
    name = "modules.shipments"
    label = "shipments"
