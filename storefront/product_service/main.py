# product_service/main.py
from fastapi import FastAPI, HTTPException

from storefront.domain.products import Inventory, Product
from storefront.utils.settings import INVENTORY_PATH


def create_app(inventory: Inventory | None = None) -> FastAPI:
    app = FastAPI(title="Product Service (dev mock)")
    catalogue = inventory or Inventory.from_file(INVENTORY_PATH)

    @app.get("/products", response_model=list[Product])
    def list_products():
        return catalogue.all()

    @app.get("/products/{product_id}", response_model=Product)
    def get_product(product_id: str):
        product = catalogue.find(product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    return app


app = create_app()
