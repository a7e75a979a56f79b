from django.apps import AppConfig


class ProductsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.products"
    label = "products"

    def ready(self) -> None:
        from modules.products.repositories.django_repository import (
            ProductDjangoRepository,
        )

        # Owned store handle, injected into the views by ``urls.py``.
        self.store = ProductDjangoRepository()
