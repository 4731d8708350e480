"""
Service layer tests for contacts.

Tests cover:
- WhatsApp normalization
- Upsert-by-WhatsApp semantics
- Delete protection
- CSV export / import
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from apps.contacts.models import Customer, Seller
from apps.contacts.services import (
    normalize_whatsapp,
    create_customer,
    update_customer,
    delete_customer,
    search_customers,
    find_customer_by_whatsapp,
    create_seller,
    update_seller,
    delete_seller,
    upsert_party,
    export_customers,
    import_customers,
    InvalidContactError,
    DuplicateWhatsAppError,
    ContactInUseError,
    CustomerNotFoundError,
    ImportFileTooLargeError,
    InvalidImportFileError,
)
from apps.orders.models import Order, SellerOrder


def csv_upload(text, name='customers.csv'):
    return SimpleUploadedFile(name, text.encode('utf-8'), content_type='text/csv')


# =============================================================================
# Normalization Tests
# =============================================================================

class TestNormalizeWhatsapp:

    @pytest.mark.parametrize('raw, expected', [
        ('081234567890', '6281234567890'),
        ('81234567890', '6281234567890'),
        ('+62 812-3456-7890', '6281234567890'),
        ('6281234567890', '6281234567890'),
        ('+1 (555) 010-0000', '15550100000'),
        ('', None),
        ('---', None),
        (None, None),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_whatsapp(raw) == expected


# =============================================================================
# Customer Management Tests
# =============================================================================

@pytest.mark.django_db
class TestCustomerManagement:

    def test_create_requires_name_or_whatsapp(self):
        with pytest.raises(InvalidContactError):
            create_customer(name='  ', address='Somewhere')

    def test_create_upserts_by_whatsapp(self, customer):
        result = create_customer(name='Budi S.', whatsapp='0812-3456-7890')

        assert result.id == customer.id
        assert result.name == 'Budi S.'
        assert result.address == 'Jl. Merdeka 1, Bandung'
        assert Customer.objects.count() == 1

    def test_create_with_whatsapp_only_uses_number_as_name(self):
        result = create_customer(whatsapp='0811000111')

        assert result.name == '62811000111'

    def test_create_without_whatsapp_always_creates(self, walk_in_customer):
        create_customer(name='Siti')

        assert Customer.objects.filter(name='Siti').count() == 2

    def test_update_requires_a_field(self, customer):
        with pytest.raises(InvalidContactError):
            update_customer(customer_id=customer.id, data={'name': None})

    def test_update_normalizes_whatsapp(self, customer):
        result = update_customer(customer_id=customer.id, data={'whatsapp': '0899 1111 2222'})

        assert result.whatsapp == '6289911112222'

    def test_update_duplicate_whatsapp(self, customer, walk_in_customer):
        with pytest.raises(DuplicateWhatsAppError):
            update_customer(customer_id=walk_in_customer.id, data={'whatsapp': customer.whatsapp})

    def test_delete_refused_while_used(self, customer):
        Order.objects.create(customer=customer)
        Order.objects.create(customer=customer)

        with pytest.raises(ContactInUseError, match='used in 2 orders'):
            delete_customer(customer_id=customer.id)

    def test_delete(self, customer):
        delete_customer(customer_id=customer.id)

        assert not Customer.objects.exists()

    def test_search(self, customer, walk_in_customer):
        assert list(search_customers(q='bandung')) == [customer]
        assert list(search_customers(q='6281')) == [customer]
        assert list(search_customers()) == [customer, walk_in_customer]

    def test_find_by_whatsapp(self, customer):
        assert find_customer_by_whatsapp(whatsapp='081234567890') == customer
        assert find_customer_by_whatsapp(whatsapp='') is None


# =============================================================================
# Seller Management Tests
# =============================================================================

@pytest.mark.django_db
class TestSellerManagement:

    def test_create_requires_name(self):
        with pytest.raises(InvalidContactError):
            create_seller(name='')

    def test_create_duplicate_whatsapp(self, seller):
        with pytest.raises(DuplicateWhatsAppError):
            create_seller(name='Other', whatsapp='085711112222')

    def test_update_whatsapp_taken(self, seller):
        other = create_seller(name='Other', whatsapp='0811')

        with pytest.raises(DuplicateWhatsAppError):
            update_seller(seller_id=other.id, data={'whatsapp': seller.whatsapp})

    def test_update_clears_address(self, seller):
        result = update_seller(seller_id=seller.id, data={'address': ''})

        assert result.address is None
        assert result.name == 'Pak Joko Farm'

    def test_delete_refused_while_used(self, seller):
        SellerOrder.objects.create(seller=seller)

        with pytest.raises(ContactInUseError):
            delete_seller(seller_id=seller.id)


# =============================================================================
# Order Party Tests
# =============================================================================

@pytest.mark.django_db
class TestUpsertParty:

    def test_nothing_given(self):
        assert upsert_party(Customer, None) is None
        assert upsert_party(Customer, {'name': ' '}) is None

    def test_connects_and_refreshes_by_whatsapp(self, customer):
        result = upsert_party(Customer, {'name': 'Budi', 'whatsapp': '081234567890'})

        assert result.id == customer.id
        assert result.name == 'Budi'
        assert result.address == 'Jl. Merdeka 1, Bandung'

    def test_creates_new(self):
        result = upsert_party(Seller, {'name': 'Kebun Maju', 'whatsapp': '0822'})

        assert result.whatsapp == '62822'

    def test_connects_by_id(self, customer):
        assert upsert_party(Customer, {'id': customer.id}) == customer

    def test_unknown_id(self):
        with pytest.raises(CustomerNotFoundError):
            upsert_party(Customer, {'id': '00000000-0000-0000-0000-000000000000'})


# =============================================================================
# CSV Tests
# =============================================================================

@pytest.mark.django_db
class TestCustomerExport:

    def test_simple_export(self, customer):
        filename, content = export_customers(simple=True)

        assert filename.startswith('customers-simple-')
        assert content.splitlines() == [
            'name,whatsapp,address',
            'Budi Santoso,6281234567890,"Jl. Merdeka 1, Bandung"',
        ]

    def test_excel_export_wraps_whatsapp(self, customer, walk_in_customer):
        filename, content = export_customers(simple=True, excel=True)

        assert filename.startswith('customers-simple-excel-')
        lines = content.splitlines()
        assert 'Budi Santoso,="6281234567890","Jl. Merdeka 1, Bandung"' in lines
        assert 'Siti,,Pasar Baru' in lines

    def test_full_export_columns(self, customer):
        _, content = export_customers()
        header, row = content.splitlines()

        assert header == 'id,name,whatsapp,address,created_at'
        assert row.startswith(f'{customer.id},Budi Santoso,')

    def test_embedded_quotes_doubled(self, db):
        Customer.objects.create(name='Toko "Segar"', whatsapp='62800')
        _, content = export_customers(simple=True)

        assert '"Toko ""Segar""",62800,' in content.splitlines()


@pytest.mark.django_db
class TestCustomerImport:

    def test_import_creates_and_updates(self, customer):
        upload = csv_upload(
            'Name,WhatsApp,Address\r\n'
            'Budi Baru,081234567890,\r\n'
            '"Ani, Ibu",0813 2222 3333,"Jl. ""Mawar"" 2"\r\n'
            ',,\r\n'
            'Tanpa Nomor,,Cimahi\r\n'
        )
        result = import_customers(upload=upload)

        assert result == {
            'created': 2,
            'updated': 1,
            'skipped': 1,
            'deleted': 0,
            'errors': [],
            'replace': False,
        }
        customer.refresh_from_db()
        assert customer.name == 'Budi Baru'
        assert customer.address == 'Jl. Merdeka 1, Bandung'
        ani = Customer.objects.get(whatsapp='6281322223333')
        assert ani.name == 'Ani, Ibu'
        assert ani.address == 'Jl. "Mawar" 2'

    def test_import_unwraps_excel_cells(self, db):
        import_customers(upload=csv_upload('name,whatsapp\nAndi,="6281999"\n'))

        assert Customer.objects.get(name='Andi').whatsapp == '6281999'

    def test_import_replace_prunes_missing_numbers(self, customer, walk_in_customer):
        gone = Customer.objects.create(name='Lama', whatsapp='6280000')
        kept_with_orders = Customer.objects.create(name='Langganan', whatsapp='6287777')
        Order.objects.create(customer=kept_with_orders)

        result = import_customers(
            upload=csv_upload('whatsapp,name\n6281234567890,Budi\n'),
            replace=True,
        )

        assert result['deleted'] == 1
        assert result['replace'] is True
        assert not Customer.objects.filter(id=gone.id).exists()
        assert Customer.objects.filter(id=walk_in_customer.id).exists()
        assert Customer.objects.filter(id=kept_with_orders.id).exists()

    def test_import_requires_known_header(self, db):
        with pytest.raises(InvalidImportFileError):
            import_customers(upload=csv_upload('foo,bar\n1,2\n'))

    def test_import_missing_file(self, db):
        with pytest.raises(InvalidImportFileError):
            import_customers(upload=None)

    def test_import_too_large(self, db, settings):
        settings.POS = {**settings.POS, 'IMPORT_MAX_BYTES': 10}

        with pytest.raises(ImportFileTooLargeError):
            import_customers(upload=csv_upload('name\nA very long name\n'))

    def test_simple_export_round_trip(self, customer, walk_in_customer):
        Customer.objects.create(name='Toko "Segar", Pusat', whatsapp='6282100', address='Line\nBreak')
        before = {
            c.whatsapp: (c.name, c.address)
            for c in Customer.objects.exclude(whatsapp__isnull=True)
        }
        _, content = export_customers(simple=True, excel=True)

        Customer.objects.all().delete()
        import_customers(upload=csv_upload(content))

        after = {
            c.whatsapp: (c.name, c.address)
            for c in Customer.objects.exclude(whatsapp__isnull=True)
        }
        assert after == before
