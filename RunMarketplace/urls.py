"""
Main URL configuration for RunMarketplace project.
"""
from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include(('apps.storefront.urls', 'storefront'), namespace='storefront')),
    path('', include(('apps.users.urls', 'users'), namespace='users')),
    path('', include(('apps.vendors.urls', 'vendors'), namespace='vendors')),
    # Password sign-in and sign-up only happen on the portals
    path('accounts/login/', RedirectView.as_view(pattern_name='users:auth', query_string=True)),
    path('accounts/signup/', RedirectView.as_view(pattern_name='users:auth', query_string=True)),
    path('accounts/', include('allauth.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
