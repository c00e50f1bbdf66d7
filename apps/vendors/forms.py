"""
Vendor App Forms
Product management, stock updates, branding and social links
"""

from django import forms
from django.core.exceptions import ValidationError

from .models import Category, Product, Vendor
from .services.utils import validate_image_file


def clean_uploaded_image(image, max_size_mb=5):
    if image:
        is_valid, error = validate_image_file(image, max_size_mb=max_size_mb)
        if not is_valid:
            raise ValidationError(error)
    return image


# ==========================================
# PRODUCT FORM
# ==========================================

class ProductForm(forms.ModelForm):
    """
    New product: name, description, whole-Naira price, category and an
    optional first image
    """

    image = forms.ImageField(
        required=False,
        widget=forms.FileInput(attrs={
            'class': 'form-file',
            'accept': 'image/*'
        })
    )

    class Meta:
        model = Product
        fields = ['name', 'description', 'price_naira', 'category', 'stock_quantity']
        labels = {
            'price_naira': 'Price (₦)',
        }
        widgets = {
            'name': forms.TextInput(attrs={
                'class': 'form-input',
                'placeholder': 'Product name',
                'maxlength': '200'
            }),
            'description': forms.Textarea(attrs={
                'class': 'form-textarea',
                'rows': 4,
                'placeholder': 'Describe your product...'
            }),
            'price_naira': forms.NumberInput(attrs={
                'class': 'form-input',
                'placeholder': '15000',
                'min': '1',
                'step': '1'
            }),
            'category': forms.Select(attrs={
                'class': 'form-select'
            }),
            'stock_quantity': forms.NumberInput(attrs={
                'class': 'form-input',
                'min': '0'
            }),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['category'].queryset = Category.objects.all()
        self.fields['category'].required = True
        self.fields['stock_quantity'].required = False

    def clean_stock_quantity(self):
        quantity = self.cleaned_data.get('stock_quantity')
        return 1 if quantity is None else quantity

    def clean_image(self):
        return clean_uploaded_image(self.cleaned_data.get('image'))


class StockUpdateForm(forms.Form):
    stock_quantity = forms.IntegerField(
        min_value=0,
        error_messages={
            'min_value': 'Stock quantity cannot be negative.',
            'invalid': 'Enter a whole number.',
        }
    )


# ==========================================
# BRANDING & SOCIAL LINKS
# ==========================================

class LogoUploadForm(forms.Form):
    logo = forms.ImageField(
        widget=forms.FileInput(attrs={'accept': 'image/*'})
    )

    def clean_logo(self):
        return clean_uploaded_image(self.cleaned_data.get('logo'), max_size_mb=2)


class SocialLinksForm(forms.ModelForm):

    class Meta:
        model = Vendor
        fields = ['instagram_url', 'facebook_url', 'twitter_url', 'tiktok_url', 'website_url']
        widgets = {
            name: forms.URLInput(attrs={'class': 'form-input', 'placeholder': 'https://'})
            for name in ['instagram_url', 'facebook_url', 'twitter_url', 'tiktok_url', 'website_url']
        }
