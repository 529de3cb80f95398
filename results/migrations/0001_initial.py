import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('academics', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Examination',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('max_marks', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('grade_scale', models.CharField(blank=True, max_length=50, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('classroom', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='examinations', to='academics.classroom')),
            ],
            options={
                'ordering': ['-created_at', 'name'],
                'indexes': [models.Index(fields=['classroom'], name='exam_classroom_idx')],
            },
        ),
        migrations.CreateModel(
            name='MarkRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('marks_scored', models.DecimalField(decimal_places=2, max_digits=5, validators=[django.core.validators.MinValueValidator(0)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('examination', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='marks', to='results.examination')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='marks', to='academics.studentprofile')),
                ('subject', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='marks', to='academics.subject')),
            ],
            options={
                'ordering': ['examination', 'student', 'subject'],
                'indexes': [
                    models.Index(fields=['examination', 'student'], name='mark_exam_student_idx'),
                    models.Index(fields=['student'], name='mark_student_idx'),
                    models.Index(fields=['subject'], name='mark_subject_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('examination', 'student', 'subject'), name='unique_exam_student_subject'),
                ],
            },
        ),
    ]
