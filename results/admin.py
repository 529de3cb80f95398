import csv
import io

from django.contrib import admin, messages
from django.db import transaction
from django.http import HttpResponse, HttpResponseRedirect
from django.middleware.csrf import get_token
from django.shortcuts import get_object_or_404
from django.urls import path, reverse
from django.utils.html import format_html
from rest_framework import serializers

from academics.models import StudentProfile, Subject
from .models import Examination, MarkRecord
from .serializers import MarkEntrySerializer


@admin.register(Examination)
class ExaminationAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'classroom', 'max_marks', 'grade_scale', 'created_at', 'action_links']
    list_filter = ['classroom']
    search_fields = ['name']

    def action_links(self, obj):
        import_url = reverse('admin:results_examination_import_marks', args=[obj.id])
        return format_html('<a class="button" href="{}">Import Marks</a>', import_url)
    action_links.short_description = 'Actions'

    def get_urls(self):
        urls = super().get_urls()
        custom = [
            path('<int:exam_id>/import-marks/', self.admin_site.admin_view(self.import_marks_view), name='results_examination_import_marks'),
        ]
        return custom + urls

    def import_marks_view(self, request, exam_id):
        exam = get_object_or_404(Examination, pk=exam_id)

        if request.method == 'POST':
            file = request.FILES.get('file')
            if not file:
                messages.error(request, 'No file uploaded')
                return HttpResponseRedirect(request.path)

            try:
                content = file.read().decode('utf-8-sig')
            except UnicodeDecodeError:
                messages.error(request, 'Import failed: file is not UTF-8 encoded CSV')
                return HttpResponseRedirect(request.path)

            reader = csv.DictReader(io.StringIO(content))
            created_count = 0
            updated_count = 0
            errors = []
            marks_field = MarkEntrySerializer().fields['marks_scored']

            with transaction.atomic():
                # Expected columns: roll_number, subject_name, marks_scored
                for row_num, row in enumerate(reader, start=2):
                    roll = (row.get('roll_number') or '').strip()
                    subject_name = (row.get('subject_name') or '').strip()
                    try:
                        marks = marks_field.run_validation(row.get('marks_scored'))
                    except serializers.ValidationError as e:
                        errors.append(f"Row {row_num}: marks_scored {'; '.join(str(d) for d in e.detail)}")
                        continue

                    if not roll or not subject_name:
                        errors.append(f"Row {row_num}: Missing roll_number or subject_name")
                        continue
                    if marks < 0 or marks > exam.max_marks:
                        errors.append(f"Row {row_num}: marks must be between 0 and {exam.max_marks}")
                        continue

                    student = StudentProfile.objects.filter(classroom=exam.classroom, roll_number=roll).first()
                    if not student:
                        errors.append(f"Row {row_num}: Student with roll {roll} not found")
                        continue

                    subject = Subject.objects.filter(classroom=exam.classroom, name=subject_name).first()
                    if not subject:
                        errors.append(f"Row {row_num}: Subject '{subject_name}' not found")
                        continue

                    _, created = MarkRecord.objects.update_or_create(
                        examination=exam,
                        student=student,
                        subject=subject,
                        defaults={'marks_scored': marks},
                    )
                    if created:
                        created_count += 1
                    else:
                        updated_count += 1

            messages.success(request, f"Import complete! Created: {created_count}, Updated: {updated_count}")
            for err in errors[:10]:  # Show first 10 errors
                messages.warning(request, err)
            return HttpResponseRedirect(reverse('admin:results_examination_change', args=[exam_id]))

        csrf = get_token(request)
        template_csv = "roll_number,subject_name,marks_scored\n1,Mathematics,75\n2,English,68"
        html = f"""
        <html>
        <head><title>Import Marks</title></head>
        <body style="font-family: Arial; padding: 20px;">
            <h1>Import Marks for: {exam.name}</h1>
            <p><strong>Class:</strong> {exam.classroom} | <strong>Max marks:</strong> {exam.max_marks}</p>
            <h3>CSV Format Required:</h3>
            <pre style="background: #f5f5f5; padding: 10px;">{template_csv}</pre>
            <form method="post" enctype="multipart/form-data">
                <input type="hidden" name="csrfmiddlewaretoken" value="{csrf}" />
                <input type="file" name="file" accept=".csv" required />
                <button type="submit">Upload &amp; Import</button>
            </form>
            <p><a href="{reverse('admin:results_examination_change', args=[exam_id])}">Back to Examination</a></p>
        </body>
        </html>
        """
        return HttpResponse(html)


@admin.register(MarkRecord)
class MarkRecordAdmin(admin.ModelAdmin):
    list_display = ['id', 'examination', 'student_name', 'subject', 'marks_scored', 'updated_at']
    list_filter = ['examination', 'subject']
    search_fields = ['student__user__full_name', 'student__roll_number']

    def student_name(self, obj):
        return obj.student.full_name
    student_name.short_description = 'Student'
