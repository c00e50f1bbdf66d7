from django.urls import path
from . import views

app_name = 'vendors'

urlpatterns = [
    # Dashboard
    path('vendor-dashboard/', views.dashboard, name='dashboard'),

    # ==========================================
    # PRODUCT MANAGEMENT
    # ==========================================
    path('vendor-dashboard/products/add/', views.product_add, name='product_add'),
    path('vendor-dashboard/products/<int:product_id>/mark-sold/', views.product_mark_sold, name='product_mark_sold'),
    path('vendor-dashboard/products/<int:product_id>/stock/', views.product_update_stock, name='product_update_stock'),
    path('vendor-dashboard/products/<int:product_id>/toggle-stock/', views.product_toggle_stock, name='product_toggle_stock'),
    path('vendor-dashboard/products/<int:product_id>/toggle-archive/', views.product_toggle_archive, name='product_toggle_archive'),
    path('vendor-dashboard/products/<int:product_id>/delete/', views.product_delete, name='product_delete'),

    # ==========================================
    # BRANDING
    # ==========================================
    path('vendor-dashboard/logo/', views.logo_upload, name='logo_upload'),
    path('vendor-dashboard/social-links/', views.social_links_update, name='social_links_update'),

    # ==========================================
    # ADMIN
    # ==========================================
    path('admin-dashboard/', views.admin_dashboard, name='admin_dashboard'),
    path('admin-dashboard/vendors/<int:user_id>/<slug:action>/', views.admin_vendor_action, name='admin_vendor_action'),
]
