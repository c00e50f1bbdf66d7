from django.core.management.base import BaseCommand
from apps.vendors.models import Category


class Command(BaseCommand):
    help = 'Create the storefront categories for Run Marketplace'

    def handle(self, *args, **kwargs):
        categories_data = [
            ("Men's Fashion", '👔'),
            ("Women's Fashion", '👗'),
            ('Electronics', '📱'),
            ('Phone Gadgets', '🔌'),
            ('Beauty & Health', '💄'),
            ('Accessories', '👜'),
            ('Food & Groceries', '🛒'),
            ('Home & Living', '🏠'),
            ('Sports & Fitness', '⚽'),
            ('Books & Education', '📚'),
        ]

        for sort_order, (name, icon) in enumerate(categories_data):
            category, created = Category.objects.get_or_create(
                name=name,
                defaults={'icon': icon, 'sort_order': sort_order}
            )

            if created:
                self.stdout.write(self.style.SUCCESS(f'✓ Created category: {icon} {name}'))
            else:
                self.stdout.write(self.style.WARNING(f'- Category already exists: {name}'))

        self.stdout.write(self.style.SUCCESS('\n✅ All categories created successfully!'))
        self.stdout.write(f'Total categories: {Category.objects.count()}')
