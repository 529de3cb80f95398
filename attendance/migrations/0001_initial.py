import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('academics', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='AttendanceRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField()),
                ('status', models.CharField(choices=[('Present', 'Present'), ('Absent', 'Absent')], max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('classroom', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attendance_records', to='academics.classroom')),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attendances', to='academics.studentprofile')),
            ],
            options={
                'ordering': ['-date'],
                'indexes': [
                    models.Index(fields=['classroom', 'date'], name='attendance_class_date_idx'),
                    models.Index(fields=['student', 'date'], name='attendance_student_date_idx'),
                    models.Index(fields=['date'], name='attendance_date_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('student', 'date'), name='unique_student_date'),
                ],
            },
        ),
    ]
