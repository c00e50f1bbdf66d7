from django.urls import path
from . import views

app_name = 'storefront'

urlpatterns = [
    path('', views.home, name='home'),

    # ==========================================
    # CATALOG
    # ==========================================
    path('products/', views.products, name='products'),
    path('product/<slug:slug>/', views.product_detail, name='product_detail'),
    path('product/<slug:slug>/order/', views.product_order, name='product_order'),
    path('product/<slug:slug>/purchase/', views.product_purchase, name='product_purchase'),
    path('category/<slug:slug>/', views.category_detail, name='category_detail'),
    path('brands/', views.brands, name='brands'),
    path('brand/<slug:slug>/', views.brand_detail, name='brand_detail'),

    # ==========================================
    # WISHLIST
    # ==========================================
    path('wishlist/', views.wishlist, name='wishlist'),
    path('wishlist/toggle/<int:product_id>/', views.wishlist_toggle, name='wishlist_toggle'),
    path('wishlist/merge/', views.wishlist_merge, name='wishlist_merge'),
]
