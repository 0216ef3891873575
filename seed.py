from app import create_app
from models import db, MenuItem

SAMPLE_ITEMS = [
    dict(title="Espresso", title_kurdish="ئێسپریسۆ", category="coffee", price=2500,
         description="Single shot of dark roast", image_url="/uploads/espresso.jpg"),
    dict(title="Iced Latte", title_kurdish="لاتەی سارد", category="icecoffee", price=4000,
         description="Espresso, cold milk and ice", image_url="/uploads/iced-latte.jpg"),
    dict(title="Mojito", title_kurdish="مۆهیتۆ", category="mexican", price=4500,
         description="Lime, mint and soda", image_url="/uploads/mojito.jpg"),
    dict(title="Chocolate Milkshake", title_kurdish="میلک شەیکی چوکلێت", category="milkshake", price=5000,
         description="Vanilla ice cream blended with chocolate", image_url="/uploads/milkshake.jpg"),
]

app = create_app()
with app.app_context():
    db.create_all()

    if MenuItem.query.count() == 0:
        db.session.add_all([MenuItem(**item) for item in SAMPLE_ITEMS])

    db.session.commit()
    print(f"Seeded. {MenuItem.query.count()} menu items.")
