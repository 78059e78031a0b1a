from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from fiscaal.db.session import get_session
from fiscaal.core.errors import NotFoundError
from fiscaal.models.product import Product
from fiscaal.schemas import ProductIn

router = APIRouter(prefix="/products", tags=["Products"])


# LIST (active only unless asked otherwise)
@router.get("")
def products_list(
    include_inactive: bool = False,
    session: Session = Depends(get_session),
):
    query = select(Product)

    if not include_inactive:
        query = query.where(Product.active == True)

    return session.exec(query.order_by(Product.name)).all()


# CREATE
@router.post("", status_code=201)
def product_create(
    data: ProductIn,
    session: Session = Depends(get_session),
):
    product = Product(**data.model_dump())

    session.add(product)
    session.commit()
    session.refresh(product)
    return product


# UPDATE (also used to deactivate: active=false)
@router.put("/{product_id}")
def product_update(
    product_id: int,
    data: ProductIn,
    session: Session = Depends(get_session),
):
    product = session.get(Product, product_id)
    if not product:
        raise NotFoundError("Product not found")

    for name, value in data.model_dump().items():
        setattr(product, name, value)

    session.add(product)
    session.commit()
    session.refresh(product)
    return product
