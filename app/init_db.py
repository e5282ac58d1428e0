"""Create tables and optionally load demo data.

Usage:
    python -m app.init_db
    python -m app.init_db --seed
"""

import argparse
import logging
import random
from datetime import date, datetime, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

import app.models  # registers every model on Base.metadata
from app.config import settings
from app.crud import crud_category, crud_site_analytics, crud_tag, crud_user
from app.database import Base, database
from app.models.analytics import PostAnalytics, SiteAnalytics
from app.models.post import Post, PostStatus

logger = logging.getLogger(__name__)

SEED_CATEGORIES = [
    {"name": "Yapay Zeka", "slug": "yapay-zeka", "description": "AI ve makine öğrenimi üzerine yazılar", "color": "#8B5CF6"},
    {"name": "Web Geliştirme", "slug": "web-gelistirme", "description": "Modern web teknolojileri ve framework'ler", "color": "#3B82F6"},
    {"name": "Teknoloji", "slug": "teknoloji", "description": "Teknoloji dünyasından haberler ve trendler", "color": "#10B981"},
    {"name": "Programlama", "slug": "programlama", "description": "Programlama dilleri ve best practice'ler", "color": "#F59E0B"},
]

SEED_TAGS = ["Next.js", "React", "TypeScript", "AI", "ChatGPT"]

SEED_POSTS = [
    {
        "title": "Next.js 16 ile Modern Web Uygulamaları Geliştirme",
        "slug": "nextjs-16-modern-web-uygulamalari",
        "excerpt": "Next.js 16 ile birlikte gelen yeni özellikler ve performans iyileştirmeleri hakkında kapsamlı bir rehber.",
        "content": (
            "<h2>Giriş</h2><p>Next.js 16, modern web uygulamaları geliştirmek için güçlü araçlar sunan bir React framework'üdür.</p>"
            "<h2>Yeni Özellikler</h2><ul><li>Turbopack: Daha hızlı build süreleri</li>"
            "<li>Server Actions: Geliştirilmiş server-side işlemler</li></ul>"
            "<h2>Sonuç</h2><p>Next.js 16, web geliştirme deneyimini bir üst seviyeye taşıyor.</p>"
        ),
        "category": "web-gelistirme",
        "days_ago": 0,
        "views": 1250,
        "featured_image": "https://images.unsplash.com/photo-1633356122544-f134324a6cee?w=800&h=400&fit=crop",
        "meta_title": "Next.js 16 Rehberi - Modern Web Geliştirme",
        "keywords": ["nextjs", "react", "web development", "javascript"],
        "tags": ["Next.js", "React", "TypeScript"],
    },
    {
        "title": "Yapay Zeka Asistanları Karşılaştırması",
        "slug": "yapay-zeka-asistanlari-karsilastirmasi",
        "excerpt": "Popüler AI asistanlarını karşılaştırıyor, güçlü ve zayıf yönlerini inceliyoruz.",
        "content": (
            "<h2>Yapay Zeka Asistanları</h2><p>Günümüzde birçok güçlü dil modeli ön plana çıkıyor.</p>"
            "<h2>Karşılaştırma</h2><p>Her model farklı kullanım senaryoları için uygundur.</p>"
        ),
        "category": "yapay-zeka",
        "days_ago": 2,
        "views": 3420,
        "featured_image": "https://images.unsplash.com/photo-1677442136019-21780ecad995?w=800&h=400&fit=crop",
        "meta_title": "AI Asistanları - Hangisi Daha İyi?",
        "keywords": ["chatgpt", "ai", "artificial intelligence"],
        "tags": ["AI", "ChatGPT"],
    },
    {
        "title": "TypeScript ile Tip Güvenli Kod Yazma",
        "slug": "typescript-tip-guvenli-kod",
        "excerpt": "TypeScript kullanarak nasıl daha güvenli ve sürdürülebilir kod yazabileceğinizi öğrenin.",
        "content": (
            "<h2>TypeScript Nedir?</h2><p>TypeScript, JavaScript'e statik tip desteği ekleyen bir programlama dilidir.</p>"
            "<h2>Neden TypeScript?</h2><ul><li>Derleme zamanında hata yakalama</li><li>Daha iyi IDE desteği</li></ul>"
        ),
        "category": "programlama",
        "days_ago": 5,
        "views": 890,
        "featured_image": "https://images.unsplash.com/photo-1516116216624-53e697fedbea?w=800&h=400&fit=crop",
        "meta_title": "TypeScript Rehberi - Tip Güvenli Kod Yazma",
        "keywords": ["typescript", "javascript", "programming"],
        "tags": ["TypeScript"],
    },
]


def create_tables() -> None:
    Base.metadata.create_all(bind=database.engine)
    logger.info("Tables created successfully")


def seed(db: Session) -> None:
    """Insert demo data. Rows that already exist (by email/slug/date) are kept."""
    admin = crud_user.get_by_email(db, settings.ADMIN_EMAIL)
    if not admin:
        admin = crud_user.create_user(
            db,
            email=settings.ADMIN_EMAIL,
            password=settings.ADMIN_PASSWORD,
            name="Admin User",
            role="admin",
            image="https://api.dicebear.com/7.x/avataaars/svg?seed=admin",
        )
    logger.info(f"Admin user ready: {admin.email}")

    categories = {}
    for data in SEED_CATEGORIES:
        category = crud_category.get_by_slug(db, data["slug"])
        if not category:
            category = crud_category.create(db, obj_in=data)
        categories[category.slug] = category
    logger.info(f"{len(categories)} categories ready")

    crud_tag.connect_or_create(db, SEED_TAGS)
    db.commit()

    for data in SEED_POSTS:
        if db.scalar(select(Post.id).where(Post.slug == data["slug"])):
            continue
        post = Post(
            title=data["title"],
            slug=data["slug"],
            excerpt=data["excerpt"],
            content=data["content"],
            featured_image=data["featured_image"],
            category_id=categories[data["category"]].id,
            author_id=admin.id,
            status=PostStatus.PUBLISHED,
            published_at=datetime.utcnow() - timedelta(days=data["days_ago"]),
            views=data["views"],
            meta_title=data["meta_title"],
            meta_description=data["excerpt"][:160],
            keywords=data["keywords"],
            tags=crud_tag.connect_or_create(db, data["tags"]),
            analytics=PostAnalytics(
                total_views=data["views"],
                unique_visitors=int(data["views"] * 0.7),
                avg_time_on_page=random.randint(120, 420),
                bounce_rate=random.uniform(0.2, 0.7),
            ),
        )
        db.add(post)
        db.commit()
        logger.info(f"Post created: {post.title}")

    today = date.today()
    for offset in range(7):
        day = today - timedelta(days=offset)
        if crud_site_analytics.get_by_date(db, day=day):
            continue
        ad_revenue = random.uniform(10, 60)
        affiliate_revenue = random.uniform(10, 60)
        db.add(SiteAnalytics(
            date=day,
            total_views=random.randint(500, 1500),
            unique_visitors=random.randint(300, 1000),
            ad_revenue=ad_revenue,
            affiliate_revenue=affiliate_revenue,
            total_revenue=ad_revenue + affiliate_revenue,
        ))
    db.commit()
    logger.info("Site analytics created for last 7 days")


def main():
    parser = argparse.ArgumentParser(description="Create database tables")
    parser.add_argument("--seed", action="store_true", help="load demo admin, categories, tags and posts")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    create_tables()
    if args.seed:
        db = database.session()
        try:
            seed(db)
        finally:
            db.close()
    database.dispose()


if __name__ == "__main__":
    main()
