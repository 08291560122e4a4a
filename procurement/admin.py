from django.contrib import admin

from .models import (
    FullKitting,
    Indent,
    Lift,
    MasterRecord,
    PurchaseOrderLine,
    StageEvent,
    StoreIssue,
    TallyEntry,
    UserAccess,
    VendorQuote,
)


class VendorQuoteInline(admin.TabularInline):
    model = VendorQuote
    extra = 0


@admin.register(Indent)
class IndentAdmin(admin.ModelAdmin):
    list_display = ("indent_number", "firm_name", "product_name", "quantity", "vendor_type")
    search_fields = ("indent_number", "product_name", "indenter_name")
    list_filter = ("firm_name", "vendor_type")
    inlines = [VendorQuoteInline]


@admin.register(StageEvent)
class StageEventAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "stage", "entity_type", "entity_id", "firm_name_match", "user")
    list_filter = ("stage", "entity_type", "firm_name_match")
    readonly_fields = ("timestamp",)


for model in [PurchaseOrderLine, Lift, FullKitting, TallyEntry, StoreIssue, MasterRecord, UserAccess]:
    admin.site.register(model)
