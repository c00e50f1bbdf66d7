"""
URL configuration for Run Marketplace users app.
Location: apps/users/urls.py
"""
from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # ==========================================
    # AUTHENTICATION PORTALS
    # ==========================================
    path('auth/', views.AuthView.as_view(), name='auth'),
    path('vendor-auth/', views.VendorAuthView.as_view(), name='vendor_auth'),
    path('admin-auth/', views.AdminAuthView.as_view(), name='admin_auth'),
    path('logout/', views.logout_view, name='logout'),

    # OTP Verification
    path('verify-otp/', views.OTPVerificationView.as_view(), name='verify_otp'),
    path('resend-otp/', views.ResendOTPView.as_view(), name='resend_otp'),

    # ==========================================
    # PROFILE
    # ==========================================
    path('profile/', views.profile_view, name='profile'),
]
