"""
Storefront App Forms
Catalog filters and purchase requests
"""

from django import forms
from django.core.exceptions import ValidationError

from apps.vendors.models import Brand, Category
from .models import Purchase


# ==========================================
# CATALOG FILTERS
# ==========================================

class ProductFilterForm(forms.Form):
    """
    GET filters for /products/. Every field is optional.
    """

    SORT_CHOICES = [
        ('newest', 'Newest'),
        ('name', 'Name'),
        ('price_low', 'Price: Low to High'),
        ('price_high', 'Price: High to Low'),
    ]

    search = forms.CharField(
        required=False,
        max_length=100,
        widget=forms.TextInput(attrs={
            'class': 'form-input',
            'placeholder': 'Search products...'
        })
    )
    category = forms.ModelChoiceField(
        queryset=Category.objects.all(),
        required=False,
        empty_label='All categories'
    )
    brand = forms.ModelChoiceField(
        queryset=Brand.objects.all(),
        required=False,
        empty_label='All brands'
    )
    min_price = forms.IntegerField(required=False, min_value=0, label='Min price (₦)')
    max_price = forms.IntegerField(required=False, min_value=0, label='Max price (₦)')
    sort = forms.ChoiceField(choices=SORT_CHOICES, required=False)

    def clean(self):
        cleaned_data = super().clean()
        min_price = cleaned_data.get('min_price')
        max_price = cleaned_data.get('max_price')

        if min_price is not None and max_price is not None and min_price > max_price:
            raise ValidationError('Minimum price cannot be more than maximum price.')

        return cleaned_data

    def filter_kwargs(self):
        """
        Keyword arguments for services.filter_products.

        Built from the fields that validated; a field with errors is left
        out and an inverted price range drops both bounds.
        """
        data = getattr(self, 'cleaned_data', {})
        price_range_ok = not self.non_field_errors()
        return {
            'search': data.get('search') or None,
            'category': data['category'].pk if data.get('category') else None,
            'brand': data['brand'].pk if data.get('brand') else None,
            'min_price': data.get('min_price') if price_range_ok else None,
            'max_price': data.get('max_price') if price_range_ok else None,
            'sort': data.get('sort') or 'newest',
        }


# ==========================================
# PURCHASE FORM
# ==========================================

class PurchaseForm(forms.ModelForm):
    """
    Purchase request for a single product. The total is computed by the
    view from the current price; it is never taken from the form.
    """

    class Meta:
        model = Purchase
        fields = [
            'customer_name', 'customer_email', 'customer_phone',
            'delivery_address', 'payment_method', 'notes', 'quantity'
        ]
        labels = {
            'customer_name': 'Full Name',
            'customer_email': 'Email',
            'customer_phone': 'Phone Number',
            'notes': 'Additional Notes (Optional)',
        }
        widgets = {
            'customer_name': forms.TextInput(attrs={'class': 'form-input'}),
            'customer_email': forms.EmailInput(attrs={'class': 'form-input'}),
            'customer_phone': forms.TextInput(attrs={
                'class': 'form-input',
                'placeholder': '08012345678'
            }),
            'delivery_address': forms.Textarea(attrs={
                'class': 'form-textarea',
                'rows': 3,
                'placeholder': 'Enter your full delivery address'
            }),
            'payment_method': forms.Select(attrs={'class': 'form-select'}),
            'notes': forms.Textarea(attrs={'class': 'form-textarea', 'rows': 2}),
            'quantity': forms.NumberInput(attrs={
                'class': 'form-input',
                'min': '1',
                'max': '99'
            }),
        }
        error_messages = {
            'quantity': {
                'min_value': 'Quantity must be at least 1.',
                'max_value': 'Quantity cannot be more than 99.',
            },
        }

    def clean_customer_name(self):
        name = self.cleaned_data.get('customer_name', '').strip()
        if not name:
            raise ValidationError('Please enter your name.')
        return name

    def clean_delivery_address(self):
        address = self.cleaned_data.get('delivery_address', '').strip()
        if not address:
            raise ValidationError('Please enter a delivery address.')
        return address
