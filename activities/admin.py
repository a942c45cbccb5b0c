from django.contrib import admin
from .models import Activity, Participant


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'status', 'creator', 'current_participants', 'max_participants', 'scheduled_at', 'deleted')
    list_filter = ('status', 'deleted', 'category', 'required_skill_level')
    search_fields = ('name', 'description', 'location', 'creator__username')
    date_hierarchy = 'created_at'
    readonly_fields = ('current_participants', 'created_at', 'updated_at')


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    list_display = ('user', 'activity', 'status', 'requested_at', 'responded_at')
    list_filter = ('status',)
    search_fields = ('user__username', 'activity__name')
    readonly_fields = ('requested_at', 'responded_at')
